"""Data models used throughout the fetch pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class WebLink:
    """Normalized form of a user-supplied URL."""

    base_host: str
    full_url: str
    local_filename: str


@dataclass(frozen=True)
class MetadataRecord:
    """A single ``cmd-`` record appended to a stored document."""

    key: str
    value: str


@dataclass
class PageStats:
    """Counts derived from a document's text."""

    num_links: int
    images: int
    image_sources: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ImageReference:
    """An image ``src`` paired with where it is fetched from and stored."""

    original_src: str
    source_url: str
    local_path: str


@dataclass
class FetchResult:
    """Outcome of processing one input URL."""

    url: str
    link: Optional[WebLink] = None
    fetched: bool = False
    records: List[MetadataRecord] = field(default_factory=list)
    images: List[ImageReference] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None
