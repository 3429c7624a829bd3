"""Configuration objects and constants for the fetcher."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; webfetch/0.1)"
DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass
class FetchConfig:
    """Top-level settings that control fetching and metadata behaviour."""

    output_root: Path = Path(".")
    show_metadata: bool = False
    full_download: bool = False
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    fail_fast: bool = False
    replace_metadata: bool = False
    scoped_rewrite: bool = False
    allow_http_errors: bool = False
    chunk_size: int = DEFAULT_CHUNK_SIZE
