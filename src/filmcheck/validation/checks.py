"""
Validation helpers for film query responses and the database fixture.

Each helper checks one aspect and raises AssertionFailure listing every
violated condition of that aspect. Helpers are pure apart from the fixture
checks, which run read-only commands inside the database container.
"""

from __future__ import annotations

import typing as _typing

import filmcheck.client.types as client_types
import filmcheck.constants as _constants
import filmcheck.fixture.errors as fixture_errors
import filmcheck.fixture.postgres as postgres
import filmcheck.validation.assertions as assertions

_STARTS_WITH = _constants.STARTS_WITH_PARAM


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _body_dict(
    soft: assertions.SoftAssertions,
    response: client_types.ClientResponse,
) -> dict[str, _typing.Any] | None:
    """Return the body if it is a JSON object, recording a failure otherwise."""
    if isinstance(response.body, dict):
        return response.body
    soft.fail(f"response body should be a JSON object, got {response.body!r}")
    return None


def _films(
    soft: assertions.SoftAssertions,
    body: dict[str, _typing.Any],
) -> list[_typing.Any] | None:
    films = body.get("films")
    if isinstance(films, list):
        return films
    soft.fail(f"'films' should be an array, got {films!r}")
    return None


def _check_filter_echo(
    soft: assertions.SoftAssertions,
    body: dict[str, _typing.Any],
    expected: str,
) -> None:
    applied = body.get("filter")
    if not isinstance(applied, dict):
        soft.fail(f"'filter' should be an object, got {applied!r}")
        return
    if _STARTS_WITH not in applied:
        soft.fail(f"'filter' should contain '{_STARTS_WITH}', got {applied!r}")
        return
    soft.equal(applied[_STARTS_WITH], expected, f"filter.{_STARTS_WITH}")


# =============================================================================
# Response checks
# =============================================================================


def validate_successful_response(response: client_types.ClientResponse) -> None:
    """Status 200, JSON content type, body present."""
    with assertions.SoftAssertions("HTTP response validation") as soft:
        soft.equal(response.status_code, 200, "status code")
        soft.check(
            "application/json" in response.content_type,
            f"content type should contain 'application/json', got {response.content_type!r}",
        )
        soft.check(response.body is not None, "response body should not be null")


def validate_api_response_structure(
    response: client_types.ClientResponse,
    query: client_types.FilmQuery,
) -> None:
    """
    Body has exactly `films`, `count` and `filter`; count and filter match.

    Also checks `count == len(films)`.
    """
    with assertions.SoftAssertions("API response structure") as soft:
        body = _body_dict(soft, response)
        if body is None:
            return

        keys = set(body)
        missing = sorted(_constants.RESPONSE_KEYS - keys)
        unexpected = sorted(keys - _constants.RESPONSE_KEYS)
        soft.check(not missing, f"response should contain keys {missing}")
        soft.check(not unexpected, f"response has unexpected keys {unexpected}")

        count = body.get("count")
        soft.equal(count, query.expected_count, "count")
        _check_filter_echo(soft, body, query.starts_with)

        films = body.get("films")
        if isinstance(films, list) and _is_int(count):
            soft.equal(count, len(films), "count should equal number of films")


def validate_film_data_integrity(
    response: client_types.ClientResponse,
    expected_size: int | None = None,
) -> None:
    """Every film has a non-null `film_id` and `title`."""
    with assertions.SoftAssertions("Film data integrity") as soft:
        body = _body_dict(soft, response)
        if body is None:
            return
        films = _films(soft, body)
        if films is None:
            return

        if expected_size is not None:
            soft.equal(len(films), expected_size, "number of films")

        for index, film in enumerate(films):
            if not isinstance(film, dict):
                soft.fail(f"films[{index}] should be an object, got {film!r}")
                continue
            for key in (_constants.FILM_ID_KEY, _constants.FILM_TITLE_KEY):
                if key not in film:
                    soft.fail(f"films[{index}] is missing '{key}'")
                elif film[key] is None:
                    soft.fail(f"films[{index}].{key} should not be null")


def validate_all_titles_start_with(
    response: client_types.ClientResponse,
    expected_prefix: str,
) -> None:
    """Every title starts with the prefix, ignoring case."""
    lowered = expected_prefix.lower()
    with assertions.SoftAssertions(f"Titles starting with {expected_prefix!r}") as soft:
        body = _body_dict(soft, response)
        if body is None:
            return
        films = _films(soft, body)
        if films is None:
            return

        for index, film in enumerate(films):
            title = film.get(_constants.FILM_TITLE_KEY) if isinstance(film, dict) else None
            if not isinstance(title, str):
                soft.fail(f"films[{index}].title should be a string, got {title!r}")
            elif not title.lower().startswith(lowered):
                soft.fail(f"films[{index}].title {title!r} should start with {expected_prefix!r}")


def validate_empty_response(
    response: client_types.ClientResponse,
    query: client_types.FilmQuery,
) -> None:
    """No films, count 0, filter still echoes the input."""
    with assertions.SoftAssertions("Empty response validation") as soft:
        body = _body_dict(soft, response)
        if body is None:
            return
        soft.equal(body.get("films"), [], "films")
        soft.equal(body.get("count"), 0, "count")
        _check_filter_echo(soft, body, query.starts_with)


def validate_response_structure_consistency(response: client_types.ClientResponse) -> None:
    """`films` is an array, `count` an integer, `filter` an object."""
    with assertions.SoftAssertions("Response structure consistency") as soft:
        body = _body_dict(soft, response)
        if body is None:
            return
        films = body.get("films")
        count = body.get("count")
        applied = body.get("filter")
        soft.check(
            isinstance(films, list),
            f"'films' should be an array, got {type(films).__name__}",
        )
        soft.check(
            _is_int(count),
            f"'count' should be an integer, got {type(count).__name__}",
        )
        soft.check(
            isinstance(applied, dict),
            f"'filter' should be an object, got {type(applied).__name__}",
        )


def validate_bad_request(response: client_types.ClientResponse, value: str) -> None:
    """The service rejected an invalid parameter with HTTP 400."""
    with assertions.SoftAssertions(f"Invalid parameter {value!r}") as soft:
        soft.equal(
            response.status_code,
            400,
            f"parameter {value!r} should return HTTP 400 Bad Request",
        )


def validate_performance(
    metrics: client_types.PerformanceMetrics,
    threshold_ms: float,
    expected_count: int,
) -> None:
    """Elapsed time under the threshold and the expected number of results."""
    with assertions.SoftAssertions("Performance validation") as soft:
        soft.check(
            metrics.execution_time_ms < threshold_ms,
            f"query execution time should be under {threshold_ms} ms, "
            f"but was {metrics.execution_time_ms:.0f} ms",
        )
        soft.equal(metrics.result_count, expected_count, "result count")


# =============================================================================
# Fixture checks
# =============================================================================


def validate_fixture_running(
    fixture: postgres.PostgresFixture,
    database_name: str,
    username: str,
) -> None:
    """The container is running with the configured database and user."""
    with assertions.SoftAssertions("PostgreSQL container validation") as soft:
        soft.check(fixture.is_running(), "PostgreSQL container should be running")
        soft.equal(fixture.database_name, database_name, "database name")
        soft.equal(fixture.username, username, "username")


def validate_connection_uri(fixture: postgres.PostgresFixture, database_name: str) -> None:
    """Connection URIs point at the configured database."""
    with assertions.SoftAssertions("Database connection validation") as soft:
        uri = fixture.connection_uri
        soft.check(uri.startswith("postgresql://"), f"{uri!r} should start with 'postgresql://'")
        soft.check(database_name in uri, f"{uri!r} should contain {database_name!r}")
        jdbc_url = fixture.jdbc_url
        soft.check(
            jdbc_url.startswith("jdbc:postgresql://"),
            f"{jdbc_url!r} should start with 'jdbc:postgresql://'",
        )


def validate_seed_loaded(
    fixture: postgres.PostgresFixture,
    expected_rows: int,
    table: str = "film",
) -> None:
    """
    Count rows directly inside the container, bypassing the service.

    Raises:
        AssertionFailure: If psql fails or the count does not match.
        FixtureCommandError: If the command could not be executed at all.
    """
    command = fixture.psql_command(f"SELECT COUNT(*) FROM {table};", tuples_only=True)
    try:
        result = fixture.exec_in_container(*command)
    except fixture_errors.FixtureError as e:
        raise fixture_errors.FixtureCommandError(command, -1, str(e)) from e

    with assertions.SoftAssertions("Test data validation") as soft:
        soft.equal(
            result.exit_code,
            0,
            f"direct container query should succeed (stderr: {result.stderr.strip()!r})",
        )
        output = result.stdout.strip()
        soft.check(
            output == str(expected_rows),
            f"should have {expected_rows} rows in {table}, psql output: {output!r}",
        )
