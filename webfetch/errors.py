"""Exception types raised by the fetch pipeline."""

from __future__ import annotations

from typing import Optional


class WebFetchError(Exception):
    """Base class for every recoverable failure while processing a URL."""

    operation = "process"

    def __init__(self, message: str, *, target: Optional[str] = None) -> None:
        super().__init__(message)
        self.target = target

    def describe(self) -> str:
        cause = self.__cause__
        detail = f"{self.operation} failed"
        if self.target:
            detail += f" for {self.target}"
        detail += f": {self}"
        if cause is not None and str(cause) not in str(self):
            detail += f" ({type(cause).__name__}: {cause})"
        return detail


class InvalidURLError(WebFetchError):
    """The input has no host left once the scheme is removed."""

    operation = "format link"


class NetworkError(WebFetchError):
    """An HTTP request failed or returned a non-2xx status."""

    operation = "download"


class FetchTimeoutError(NetworkError, TimeoutError):
    """An HTTP request did not complete within the configured timeout."""


class FileIOError(WebFetchError):
    """Creating, reading, or writing a local file failed."""

    operation = "file access"


class MalformedImageRefError(WebFetchError):
    """An image ``src`` has no file name after its last slash."""

    operation = "localize image"
