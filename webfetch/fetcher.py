"""HTTP retrieval of pages and images into local files."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from .config import FetchConfig
from .errors import FetchTimeoutError, FileIOError, NetworkError

logger = logging.getLogger("webfetch")


def create_session(config: FetchConfig) -> requests.Session:
    """Build the session shared by every request in a run."""
    session = requests.Session()
    session.headers.update({"User-Agent": config.user_agent})
    return session


def save_link_content(
    session: requests.Session,
    url: str,
    destination: Path,
    config: FetchConfig,
) -> int:
    """GET ``url`` and stream the body into ``destination``, replacing it.

    Returns the number of bytes written. Nothing is written unless the
    response arrives with a 2xx status (or ``allow_http_errors`` is set).
    """
    logger.debug("GET %s -> %s", url, destination)
    try:
        with session.get(url, stream=True, timeout=config.timeout) as resp:
            if not config.allow_http_errors:
                resp.raise_for_status()
            elif not resp.ok:
                logger.warning("Keeping %s despite HTTP %s", url, resp.status_code)
            written = _write_stream(resp, destination, config.chunk_size)
    except requests.Timeout as exc:
        raise FetchTimeoutError(
            f"No response within {config.timeout:g}s", target=url
        ) from exc
    except requests.RequestException as exc:
        raise NetworkError(f"GET {url} failed", target=url) from exc
    logger.debug("Wrote %d bytes to %s", written, destination)
    return written


def _write_stream(resp: requests.Response, destination: Path, chunk_size: int) -> int:
    """Stream into a sibling ``.part`` file and move it into place once complete."""
    partial = destination.with_name(destination.name + ".part")
    written = 0
    try:
        with partial.open("wb") as handle:
            for chunk in resp.iter_content(chunk_size=chunk_size):
                if chunk:
                    handle.write(chunk)
                    written += len(chunk)
        partial.replace(destination)
    except requests.RequestException:
        partial.unlink(missing_ok=True)
        raise
    except OSError as exc:
        partial.unlink(missing_ok=True)
        raise FileIOError(f"Could not write {destination}", target=str(destination)) from exc
    return written
