"""Pattern-based scanning of stored documents for links and images."""

from __future__ import annotations

import re
from typing import List

from .models import PageStats

# Absolute outbound anchors; covers both http:// and https://.
LINK_PATTERN = re.compile(r"""href=["']https?://""", re.IGNORECASE)
IMG_TAG_PATTERN = re.compile(r"<img\b", re.IGNORECASE)
IMG_SRC_PATTERN = re.compile(r"""<img\b[^>]*?\ssrc=["']([^"']*)["']""", re.IGNORECASE)


def count_links(text: str) -> int:
    """Count anchors pointing at an absolute http(s) URL."""
    return len(LINK_PATTERN.findall(text))


def count_image_tags(text: str) -> int:
    """Count ``<img`` tag openings."""
    return len(IMG_TAG_PATTERN.findall(text))


def extract_image_sources(text: str) -> List[str]:
    """Return every ``<img>`` ``src`` value in document order, duplicates kept."""
    return IMG_SRC_PATTERN.findall(text)


def extract_page_stats(text: str, collect_sources: bool = False) -> PageStats:
    """Compute the link and image counts stored as metadata.

    Without ``collect_sources`` the image count is a plain tag count. With it,
    the ``src`` values are captured as well and the count is the number of
    captured values, so it matches what the image pass will work through.
    """
    num_links = count_links(text)
    if not collect_sources:
        return PageStats(num_links=num_links, images=count_image_tags(text))
    sources = extract_image_sources(text)
    return PageStats(num_links=num_links, images=len(sources), image_sources=sources)
