"""High-level orchestration for fetching pages and reporting their metadata."""

from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence, TextIO

import requests

from .config import FetchConfig
from .content import extract_page_stats
from .errors import FileIOError, InvalidURLError, NetworkError, WebFetchError
from .fetcher import create_session, save_link_content
from .images import localize_images
from .metadata import (
    append_metadata,
    build_records,
    format_for_display,
    read_document,
    read_metadata,
)
from .models import FetchResult, WebLink
from .utils import format_link, format_timestamp

logger = logging.getLogger("webfetch")

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_IO = 2


def fetch_page(
    session: requests.Session,
    link: WebLink,
    config: FetchConfig,
    result: FetchResult,
) -> None:
    """Download ``link``, append its metadata, and localize images if asked."""
    destination = config.output_root / link.local_filename
    logger.info("Fetching %s", link.full_url)
    save_link_content(session, link.full_url, destination, config)

    text = read_document(destination)
    stats = extract_page_stats(text, collect_sources=config.full_download)
    records = build_records(link, stats, format_timestamp())
    updated = append_metadata(destination, records, replace=config.replace_metadata)
    result.fetched = True
    result.records = records

    if config.full_download:
        result.images = localize_images(session, link, updated, config)
    logger.info("Saved %s", destination)


def process_url(
    session: requests.Session,
    url: str,
    config: FetchConfig,
    out: TextIO,
) -> FetchResult:
    """Handle one input URL; failures are captured on the returned result."""
    result = FetchResult(url=url)
    try:
        link = format_link(url)
        result.link = link
        destination = config.output_root / link.local_filename
        if not config.show_metadata:
            fetch_page(session, link, config, result)
        else:
            if destination.exists():
                out.write("-- Already Downloaded\n")
            else:
                out.write("-- Downloading Now\n")
                fetch_page(session, link, config, result)
            result.records = read_metadata(destination)
            out.write(format_for_display(result.records))
    except WebFetchError as exc:
        result.error = exc
        logger.error("%s: %s", url, exc.describe())
    out.write("\n")
    return result


def run_fetcher(
    urls: Sequence[str],
    config: FetchConfig,
    session: Optional[requests.Session] = None,
    out: Optional[TextIO] = None,
) -> List[FetchResult]:
    """Process each URL in order, one at a time.

    A failing URL does not stop the batch unless ``config.fail_fast`` is set.
    """
    out = out or sys.stdout
    own_session = session is None
    if session is None:
        session = create_session(config)
    results: List[FetchResult] = []
    try:
        for url in urls:
            result = process_url(session, url, config, out)
            results.append(result)
            if not result.ok and config.fail_fast:
                skipped = len(urls) - len(results)
                if skipped:
                    logger.warning("Stopping after failure; %d URL(s) not attempted", skipped)
                break
    finally:
        if own_session:
            session.close()
    return results


def exit_code_for(results: Sequence[FetchResult]) -> int:
    """0 when every URL succeeded, 2 for any I/O or network failure, else 1."""
    errors = [result.error for result in results if result.error is not None]
    if not errors:
        return EXIT_OK
    if any(isinstance(err, (NetworkError, FileIOError)) for err in errors):
        return EXIT_IO
    if all(isinstance(err, InvalidURLError) for err in errors):
        return EXIT_USAGE
    return EXIT_IO
