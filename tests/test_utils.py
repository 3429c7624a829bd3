import datetime as dt

import pytest

from webfetch.errors import InvalidURLError
from webfetch.utils import format_link, format_timestamp


@pytest.mark.parametrize(
    "raw, base_host, full_url, filename",
    [
        ("example.com", "example.com", "https://example.com", "example.com.html"),
        (
            "example.com/blog/post",
            "example.com/blog/post",
            "https://example.com/blog/post",
            "example.com.blog.post.html",
        ),
        ("http://example.com/a", "example.com/a", "http://example.com/a", "example.com.a.html"),
        ("https://example.com/", "example.com/", "https://example.com/", "example.com..html"),
    ],
)
def test_format_link(raw, base_host, full_url, filename):
    link = format_link(raw)
    assert link.base_host == base_host
    assert link.full_url == full_url
    assert link.local_filename == filename


def test_format_link_has_no_slashes_in_filename():
    link = format_link("a/b/c/d")
    assert "/" not in link.local_filename
    assert link.local_filename.endswith(".html")


@pytest.mark.parametrize("raw", ["", "https://", "http://", "   "])
def test_format_link_rejects_empty_host(raw):
    with pytest.raises(InvalidURLError):
        format_link(raw)


def test_format_timestamp_is_rfc1123():
    moment = dt.datetime(2006, 1, 2, 15, 4, 5, tzinfo=dt.timezone.utc)
    assert format_timestamp(moment) == "Mon, 02 Jan 2006 15:04:05 UTC"


def test_format_timestamp_defaults_to_now():
    stamp = format_timestamp()
    assert str(dt.datetime.now().year) in stamp
