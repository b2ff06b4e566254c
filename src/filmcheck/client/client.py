"""
HTTP client wrapper for the Film Query API.

Sends `GET <api_path>?startsWith=<value>` to a running service and returns
a structured ClientResponse. The value is passed through verbatim (empty
strings, symbols and digits included) so the service's own validation is
what gets exercised. There is no retry: a transport or decoding failure
surfaces as ServiceConnectionError.
"""

from __future__ import annotations

import json as _json
import logging as _logging
import time as _time
import types as _types
import typing as _typing

import httpx as _httpx

import filmcheck.client.errors as errors
import filmcheck.client.types as types
import filmcheck.constants as _constants

_logger = _logging.getLogger(__name__)


class FilmApiClient:
    """
    Synchronous client for the film query endpoint.

    Either pass a base URL (a new httpx.Client is created and owned by this
    wrapper) or an existing httpx.Client. A custom transport can be supplied
    for in-process services, e.g. httpx.MockTransport in tests.
    """

    def __init__(
        self,
        base_url: str = _constants.DEFAULT_BASE_URL,
        *,
        api_path: str = _constants.API_BASE_PATH,
        timeout: float = _constants.DEFAULT_REQUEST_TIMEOUT,
        transport: _httpx.BaseTransport | None = None,
        client: _httpx.Client | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Scheme, host and port of the service under test.
            api_path: Path of the film query endpoint.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (ignored if client is given).
            client: Existing httpx.Client to use. Not closed by close().
        """
        self._api_path = api_path
        self._owns_client = client is None
        self._client = client or _httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={
                "Accept": "application/json",
                "User-Agent": "filmcheck/1.0",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url).rstrip("/")

    @property
    def api_path(self) -> str:
        return self._api_path

    @property
    def port(self) -> int | None:
        """Port of the service, explicit or implied by the scheme."""
        url = self._client.base_url
        if url.port is not None:
            return url.port
        return {"http": 80, "https": 443}.get(url.scheme)

    def query_films(self, starts_with: str) -> types.ClientResponse:
        """
        Send one film query.

        Args:
            starts_with: Raw `startsWith` value, sent as-is.

        Returns:
            ClientResponse with status, headers, decoded body and timing.

        Raises:
            ServiceConnectionError: If the service cannot be reached or its
                response cannot be decoded.
        """
        params = {_constants.STARTS_WITH_PARAM: starts_with}
        _logger.debug("GET %s%s startsWith=%r", self.base_url, self._api_path, starts_with)

        started = _time.perf_counter()
        try:
            response = self._client.get(self._api_path, params=params)
        except _httpx.RequestError as e:
            url = f"{self.base_url}{self._api_path}"
            raise errors.ServiceConnectionError(url, str(e) or type(e).__name__) from e
        elapsed_ms = (_time.perf_counter() - started) * 1000

        _logger.debug(
            "%s %s -> %d in %.1f ms",
            response.request.method,
            response.request.url,
            response.status_code,
            elapsed_ms,
        )

        return types.ClientResponse(
            status_code=response.status_code,
            headers=response.headers,
            body=_decode_body(response),
            elapsed_ms=elapsed_ms,
            url=str(response.request.url),
        )

    def measure(self, query: types.FilmQuery) -> types.PerformanceMetrics:
        """
        Time one query and pair the elapsed time with its result count.

        A missing body or `count` field counts as zero results.
        """
        started = _time.perf_counter()
        response = self.query_films(query.starts_with)
        execution_time_ms = (_time.perf_counter() - started) * 1000

        count = 0
        if isinstance(response.body, dict):
            raw_count = response.body.get("count")
            if isinstance(raw_count, int) and not isinstance(raw_count, bool):
                count = raw_count

        return types.PerformanceMetrics(execution_time_ms=execution_time_ms, result_count=count)

    def close(self) -> None:
        """Close the underlying httpx.Client if this wrapper created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> FilmApiClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: _types.TracebackType | None,
    ) -> None:
        self.close()


def _decode_body(response: _httpx.Response) -> _typing.Any:
    """Decode a JSON body, returning None for empty or non-JSON content."""
    if not response.content:
        return None
    try:
        return response.json()
    except (_json.JSONDecodeError, UnicodeDecodeError):
        return None
