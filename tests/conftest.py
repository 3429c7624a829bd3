"""Shared fixtures: an in-memory stand-in for ``requests.Session``."""

from __future__ import annotations

from typing import Dict, List, Union

import pytest
import requests

from webfetch.config import FetchConfig


class FakeResponse:
    def __init__(
        self,
        url: str,
        body: bytes,
        status_code: int = 200,
        broken_after: Exception = None,
    ) -> None:
        self.url = url
        self.body = body
        self.status_code = status_code
        self.broken_after = broken_after

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}")

    def iter_content(self, chunk_size: int = 1):
        for start in range(0, len(self.body), chunk_size):
            yield self.body[start : start + chunk_size]
        if self.broken_after is not None:
            raise self.broken_after

    def __enter__(self) -> "FakeResponse":
        return self

    def __exit__(self, *exc) -> None:
        return None


class FakeSession:
    """Serves canned bodies by URL and records every request made."""

    def __init__(
        self, routes: Dict[str, Union[bytes, int, Exception, FakeResponse]] = None
    ) -> None:
        self.routes = dict(routes or {})
        self.calls: List[str] = []
        self.closed = False

    def get(self, url: str, stream: bool = False, timeout: float = None) -> FakeResponse:
        self.calls.append(url)
        route = self.routes.get(url, 404)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, FakeResponse):
            return route
        if isinstance(route, int):
            return FakeResponse(url, b"not found", status_code=route)
        return FakeResponse(url, route)

    def close(self) -> None:
        self.closed = True


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 64


@pytest.fixture
def config(tmp_path) -> FetchConfig:
    return FetchConfig(output_root=tmp_path, chunk_size=16)


@pytest.fixture
def fake_session():
    return FakeSession()
