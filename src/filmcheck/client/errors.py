"""Exceptions raised by the HTTP client wrapper."""

from __future__ import annotations


class ServiceConnectionError(ConnectionError):
    """Raised when the service under test cannot be reached.

    Wraps the underlying httpx transport error. Never retried.
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Service unreachable at {url}: {reason}")


class ResponseFormatError(ValueError):
    """Raised when a response body cannot be read as a film query result."""

    pass
