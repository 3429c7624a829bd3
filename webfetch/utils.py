"""Utility helpers for link normalization and timestamps."""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional

from .errors import InvalidURLError
from .models import WebLink

DEFAULT_SCHEME = "https://"
SCHEME_PATTERN = re.compile(r"^(https?://)?(.*)$", re.IGNORECASE | re.DOTALL)

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def format_link(raw: str) -> WebLink:
    """Split a raw URL or host string into host, full URL and local file name.

    ``example.com/page`` becomes ``WebLink("example.com/page",
    "https://example.com/page", "example.com.page.html")``. An explicit
    ``http://`` or ``https://`` prefix is kept; anything else gets ``https://``.
    """
    match = SCHEME_PATTERN.match(raw.strip())
    scheme, base_host = match.group(1), match.group(2)
    if not base_host:
        raise InvalidURLError(f"Invalid URL: {raw!r}", target=raw)
    if not scheme:
        scheme = DEFAULT_SCHEME
    filename = base_host.replace("/", ".") + ".html"
    return WebLink(
        base_host=base_host,
        full_url=scheme + base_host,
        local_filename=filename,
    )


def format_timestamp(moment: Optional[dt.datetime] = None) -> str:
    """Render ``moment`` (default: now, local zone) as an RFC 1123 date."""
    if moment is None:
        moment = dt.datetime.now().astimezone()
    zone = moment.tzname() or "UTC"
    return "{}, {:02d} {} {:04d} {:02d}:{:02d}:{:02d} {}".format(
        _WEEKDAYS[moment.weekday()],
        moment.day,
        _MONTHS[moment.month - 1],
        moment.year,
        moment.hour,
        moment.minute,
        moment.second,
        zone,
    )
