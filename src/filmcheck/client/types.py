"""
Type definitions for film query requests and responses.

All types are immutable and created fresh for each scenario.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import typing as _typing

import httpx as _httpx

import filmcheck.client.errors as errors
import filmcheck.constants as _constants


@_dataclasses.dataclass(frozen=True)
class FilmQuery:
    """A `startsWith` value plus what the scenario expects back."""

    starts_with: str
    expected_count: int
    description: str = ""


@_dataclasses.dataclass(frozen=True)
class ApiResponse:
    """Parsed body of a successful film query."""

    films: list[dict[str, _typing.Any]]
    count: int | None
    filter: dict[str, _typing.Any]

    @property
    def starts_with(self) -> _typing.Any:
        """The `startsWith` value the service reports having applied."""
        return self.filter.get(_constants.STARTS_WITH_PARAM)

    @property
    def titles(self) -> list[_typing.Any]:
        return [film.get(_constants.FILM_TITLE_KEY) for film in self.films]

    @classmethod
    def from_body(cls, body: _typing.Any) -> ApiResponse:
        """
        Build an ApiResponse from a decoded JSON body.

        Raises:
            ResponseFormatError: If the body is not an object, or `films`,
                `count` or `filter` have the wrong JSON type.
        """
        if not isinstance(body, dict):
            raise errors.ResponseFormatError(
                f"Expected a JSON object, got {type(body).__name__}"
            )

        films = body.get("films", [])
        count = body.get("count")
        applied_filter = body.get("filter", {})

        if not isinstance(films, list):
            raise errors.ResponseFormatError(f"'films' must be an array, got {films!r}")
        if count is not None and (isinstance(count, bool) or not isinstance(count, int)):
            raise errors.ResponseFormatError(f"'count' must be an integer, got {count!r}")
        if not isinstance(applied_filter, dict):
            raise errors.ResponseFormatError(
                f"'filter' must be an object, got {applied_filter!r}"
            )

        return cls(films=films, count=count, filter=applied_filter)


@_dataclasses.dataclass(frozen=True)
class ClientResponse:
    """Result of one round trip to the service."""

    status_code: int
    headers: _httpx.Headers
    body: _typing.Any
    """Decoded JSON body, or None if the body was empty or not JSON."""

    elapsed_ms: float
    url: str = ""

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    @property
    def is_json(self) -> bool:
        return "application/json" in self.content_type

    def api_response(self) -> ApiResponse:
        """Parse the body as a film query result."""
        return ApiResponse.from_body(self.body)


@_dataclasses.dataclass(frozen=True)
class PerformanceMetrics:
    """Elapsed time of a request paired with the result count it returned."""

    execution_time_ms: float
    result_count: int
