"""Image downloading and document rewriting for offline copies."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, Sequence
from urllib.parse import urlsplit

import requests
from filetype import guess

from .config import FetchConfig
from .content import extract_image_sources
from .errors import FileIOError, MalformedImageRefError, NetworkError
from .fetcher import save_link_content
from .metadata import write_document
from .models import ImageReference, WebLink

logger = logging.getLogger("webfetch")

IMAGE_NAME_PATTERN = re.compile(r"/([^/]+\.[A-Za-z0-9]+)$")
IMG_TAG_PATTERN = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
SRC_ATTR_PATTERN = re.compile(r"""(\ssrc=["'])([^"']*)(["'])""", re.IGNORECASE)
SKIP_PREFIXES = ("data:",)


def detect_image_format(path: Path) -> Optional[str]:
    """Detect a stored file's image type from its signature; None if not an image."""
    kind = guess(str(path))
    if kind and kind.mime.startswith("image/"):
        return kind.extension.lower()
    return None


def local_image_name(src: str) -> str:
    """File name an image is stored under: the last path segment of ``src``."""
    match = IMAGE_NAME_PATTERN.search(urlsplit(src).path)
    if not match:
        raise MalformedImageRefError(
            f"No file name after the last slash in {src!r}", target=src
        )
    return match.group(1)


def resolve_image_url(src: str, link: WebLink) -> str:
    """Absolute URL for ``src`` on the page ``link``.

    Root-relative references are appended to the page URL; anything else is
    taken to be absolute already.
    """
    if src.startswith("//"):
        scheme = link.full_url.split("://", 1)[0]
        return f"{scheme}:{src}"
    if src.startswith("/"):
        return link.full_url + src
    return src


def plan_image_references(sources: Sequence[str], link: WebLink) -> List[ImageReference]:
    """Map each distinct ``src`` to its download URL and local path.

    Sources without a usable file name are skipped with a warning.
    """
    references: List[ImageReference] = []
    seen = set()
    for src in sources:
        if src in seen:
            continue
        seen.add(src)
        if not src or src.lower().startswith(SKIP_PREFIXES):
            logger.debug("Skipping inline or empty image source %.40r", src)
            continue
        try:
            name = local_image_name(src)
        except MalformedImageRefError as exc:
            logger.warning("Skipping image on %s: %s", link.full_url, exc)
            continue
        references.append(
            ImageReference(
                original_src=src,
                source_url=resolve_image_url(src, link),
                local_path=f"{link.base_host}/{name}",
            )
        )
    return references


def rewrite_references(
    text: str,
    references: Sequence[ImageReference],
    scoped: bool = False,
) -> str:
    """Point the document at local copies.

    By default every literal occurrence of an original ``src`` is replaced,
    wherever it appears in the text. With ``scoped`` only ``src`` attributes
    inside ``<img>`` tags are touched.
    """
    if not references:
        return text
    mapping: Dict[str, str] = {ref.original_src: ref.local_path for ref in references}
    if not scoped:
        # Single pass; the longest matching source wins.
        sources = sorted(mapping, key=len, reverse=True)
        pattern = re.compile("|".join(re.escape(src) for src in sources))
        return pattern.sub(lambda match: mapping[match.group(0)], text)

    def _swap_src(attr: "re.Match[str]") -> str:
        value = mapping.get(attr.group(2))
        if value is None:
            return attr.group(0)
        return attr.group(1) + value + attr.group(3)

    def _rewrite_tag(tag: "re.Match[str]") -> str:
        return SRC_ATTR_PATTERN.sub(_swap_src, tag.group(0))

    return IMG_TAG_PATTERN.sub(_rewrite_tag, text)


def download_images(
    session: requests.Session,
    references: Sequence[ImageReference],
    config: FetchConfig,
) -> List[ImageReference]:
    """Fetch each image into the output tree; return the ones that landed."""
    saved: List[ImageReference] = []
    for ref in references:
        destination = config.output_root / Path(ref.local_path)
        try:
            save_link_content(session, ref.source_url, destination, config)
        except (NetworkError, FileIOError) as exc:
            logger.warning("Failed to fetch image %s: %s", ref.source_url, exc.describe())
            continue
        if destination.suffix.lower() != ".svg" and detect_image_format(destination) is None:
            logger.warning(
                "%s was saved but does not look like an image", ref.source_url
            )
        saved.append(ref)
    return saved


def localize_images(
    session: requests.Session,
    link: WebLink,
    text: str,
    config: FetchConfig,
) -> List[ImageReference]:
    """Download the images referenced by ``text`` and rewrite the stored page.

    ``text`` is the document as it now stands on disk, metadata records
    included. The page file is replaced with the rewritten text.
    """
    image_dir = config.output_root / link.base_host
    try:
        image_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileIOError(f"Could not create {image_dir}", target=str(image_dir)) from exc

    references = plan_image_references(extract_image_sources(text), link)
    saved = download_images(session, references, config)
    logger.info("Saved %d/%d image(s) for %s", len(saved), len(references), link.full_url)

    updated = rewrite_references(text, saved, scoped=config.scoped_rewrite)
    write_document(config.output_root / link.local_filename, updated)
    return saved
