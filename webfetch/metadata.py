"""Reading and writing the ``cmd-`` metadata records stored after a document."""

from __future__ import annotations

import html
import logging
import re
from pathlib import Path
from typing import Iterable, List

from .errors import FileIOError
from .models import MetadataRecord, PageStats, WebLink

logger = logging.getLogger("webfetch")

RECORD_PREFIX = "cmd-"
RECORD_KEYS = ("site", "num_links", "images", "last_fetch")
RECORD_PATTERN = re.compile(r'<meta name="cmd-([^"]+)" content="([^"]*)">')
RECORD_LINE_PATTERN = re.compile(r'\n?<meta name="cmd-[^"]+" content="[^"]*">')

# Stored documents may hold bytes that are not valid UTF-8; surrogateescape
# keeps them intact across a read/rewrite cycle.
ENCODING = "utf-8"
ERRORS = "surrogateescape"


def read_document(path: Path) -> str:
    try:
        return path.read_text(encoding=ENCODING, errors=ERRORS)
    except OSError as exc:
        raise FileIOError(f"Could not read {path}", target=str(path)) from exc


def write_document(path: Path, text: str) -> None:
    try:
        with path.open("w", encoding=ENCODING, errors=ERRORS, newline="") as handle:
            handle.write(text)
    except OSError as exc:
        raise FileIOError(f"Could not write {path}", target=str(path)) from exc


def format_record(record: MetadataRecord) -> str:
    """Render one record as its own line, preceded by a newline."""
    value = html.escape(record.value, quote=True)
    return f'\n<meta name="{RECORD_PREFIX}{record.key}" content="{value}">'


def build_records(link: WebLink, stats: PageStats, timestamp: str) -> List[MetadataRecord]:
    """The four records written after every fetch, in their fixed order."""
    values = (link.base_host, str(stats.num_links), str(stats.images), timestamp)
    return [MetadataRecord(key, value) for key, value in zip(RECORD_KEYS, values)]


def render_records(records: Iterable[MetadataRecord]) -> str:
    return "".join(format_record(record) for record in records)


def parse_records(text: str) -> List[MetadataRecord]:
    """Pull every record out of ``text`` in document order, duplicates kept."""
    return [
        MetadataRecord(key, html.unescape(value))
        for key, value in RECORD_PATTERN.findall(text)
    ]


def strip_records(text: str) -> str:
    """Remove every record line from ``text``."""
    return RECORD_LINE_PATTERN.sub("", text)


def append_metadata(
    path: Path,
    records: List[MetadataRecord],
    replace: bool = False,
) -> str:
    """Append ``records`` to the document at ``path`` and return its new text.

    Records are append-only by default, so a document that already carries a
    record set ends up with two. With ``replace`` the earlier records are
    dropped first and the file is rewritten.
    """
    current = read_document(path)
    block = render_records(records)
    if replace:
        stripped = strip_records(current)
        if stripped != current:
            logger.debug("Dropping existing metadata records from %s", path)
        updated = stripped + block
        write_document(path, updated)
        return updated

    try:
        with path.open("a", encoding=ENCODING, errors=ERRORS, newline="") as handle:
            handle.write(block)
    except OSError as exc:
        raise FileIOError(f"Could not append metadata to {path}", target=str(path)) from exc
    return current + block


def read_metadata(path: Path) -> List[MetadataRecord]:
    """Read the records stored in the document at ``path``."""
    return parse_records(read_document(path))


def format_for_display(records: Iterable[MetadataRecord]) -> str:
    """One ``key: value`` line per record, verbatim."""
    return "".join(f"{record.key}: {record.value}\n" for record in records)
