"""
Acceptance scenarios for the Film Query API.

Each `check_*` function runs one scenario against a live service and raises
AssertionFailure listing every violated condition. The same functions back
the pytest acceptance suite and the `filmcheck run` command.

Scenarios:
- setup: client and database fixture are wired up, seed data loaded
- films starting with a prefix: status, structure, integrity, prefix match
- performance: prefix query completes under the threshold
- empty results: a prefix with no matches returns an empty list
- invalid parameter: known-invalid values are rejected with HTTP 400
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import time as _time
import typing as _typing

import filmcheck.client.client as client_mod
import filmcheck.client.errors as client_errors
import filmcheck.client.types as client_types
import filmcheck.config.settings as settings_mod
import filmcheck.config.types as config_types
import filmcheck.fixture.errors as fixture_errors
import filmcheck.fixture.postgres as postgres
import filmcheck.validation.assertions as assertions
import filmcheck.validation.checks as checks

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True)
class ScenarioResult:
    """Outcome of one scenario run."""

    name: str
    passed: bool
    duration_ms: float
    failures: tuple[str, ...] = ()
    error: bool = False
    """True if the scenario was aborted by an error rather than failed checks."""

    def to_dict(self) -> dict[str, _typing.Any]:
        return _dataclasses.asdict(self) | {"failures": list(self.failures)}


# =============================================================================
# Query builders
# =============================================================================


def prefix_query(expectations: config_types.ExpectationsConfig) -> client_types.FilmQuery:
    """Query for the configured prefix and its expected count."""
    return client_types.FilmQuery(
        starts_with=expectations.prefix,
        expected_count=expectations.prefix_count,
        description=f"films starting with {expectations.prefix}",
    )


def empty_query(expectations: config_types.ExpectationsConfig) -> client_types.FilmQuery:
    """Query for a prefix with no matching films."""
    return client_types.FilmQuery(
        starts_with=expectations.empty_prefix,
        expected_count=0,
        description="non-existent films",
    )


# =============================================================================
# Scenarios
# =============================================================================


def check_setup(
    client: client_mod.FilmApiClient,
    fixture: postgres.PostgresFixture,
    settings: settings_mod.Settings,
) -> None:
    """Client points at a concrete port and the database fixture is seeded."""

    def _client_wired() -> None:
        with assertions.SoftAssertions("Client configuration") as soft:
            soft.check(bool(client.base_url), "base URL should be set")
            soft.check(
                (client.port or 0) > 0,
                f"service port should be assigned, got {client.port!r}",
            )

    assertions.assert_all(
        "Client and PostgreSQL setup",
        _client_wired,
        lambda: checks.validate_fixture_running(
            fixture,
            settings.database.database_name,
            settings.database.username,
        ),
        lambda: checks.validate_connection_uri(fixture, settings.database.database_name),
        lambda: checks.validate_seed_loaded(fixture, settings.expectations.total_rows),
    )


def check_films_starting_with(
    client: client_mod.FilmApiClient,
    query: client_types.FilmQuery,
) -> client_types.ClientResponse:
    """Films matching the prefix come back complete and correctly shaped."""
    response = client.query_films(query.starts_with)
    assertions.assert_all(
        f"{query.description or 'Prefix query'} validation",
        lambda: checks.validate_successful_response(response),
        lambda: checks.validate_api_response_structure(response, query),
        lambda: checks.validate_film_data_integrity(response, query.expected_count),
        lambda: checks.validate_all_titles_start_with(response, query.starts_with),
    )
    return response


def check_performance(
    client: client_mod.FilmApiClient,
    query: client_types.FilmQuery,
    threshold_ms: float,
) -> client_types.PerformanceMetrics:
    """The prefix query completes within the wall-clock threshold."""
    metrics = client.measure(query)
    _logger.info(
        "Film query performance: %.0f ms for %d results",
        metrics.execution_time_ms,
        metrics.result_count,
    )
    checks.validate_performance(metrics, threshold_ms, query.expected_count)
    return metrics


def check_empty_results(
    client: client_mod.FilmApiClient,
    query: client_types.FilmQuery,
) -> client_types.ClientResponse:
    """A prefix without matches yields an empty, well-formed response."""
    response = client.query_films(query.starts_with)
    assertions.assert_all(
        "Empty results validation",
        lambda: checks.validate_successful_response(response),
        lambda: checks.validate_empty_response(response, query),
        lambda: checks.validate_response_structure_consistency(response),
    )
    return response


def check_invalid_parameter(
    client: client_mod.FilmApiClient,
    value: str,
) -> client_types.ClientResponse:
    """The service rejects a known-invalid `startsWith` value with HTTP 400."""
    response = client.query_films(value)
    checks.validate_bad_request(response, value)
    return response


# =============================================================================
# Runner
# =============================================================================

# Errors that abort one scenario but not the whole run
_SCENARIO_ERRORS = (
    client_errors.ServiceConnectionError,
    client_errors.ResponseFormatError,
    fixture_errors.FixtureError,
)


def run_scenario(name: str, scenario: _typing.Callable[[], object]) -> ScenarioResult:
    """Run one scenario and capture its outcome."""
    started = _time.perf_counter()
    failures: tuple[str, ...] = ()
    error = False
    try:
        scenario()
    except assertions.AssertionFailure as e:
        failures = tuple(e.failures)
    except AssertionError as e:
        failures = (str(e) or "assertion failed",)
    except _SCENARIO_ERRORS as e:
        failures = (f"{type(e).__name__}: {e}",)
        error = True
    duration_ms = (_time.perf_counter() - started) * 1000

    passed = not failures
    if passed:
        _logger.info("Scenario passed: %s (%.0f ms)", name, duration_ms)
    else:
        _logger.warning("Scenario failed: %s (%d failure(s))", name, len(failures))

    return ScenarioResult(
        name=name,
        passed=passed,
        duration_ms=duration_ms,
        failures=failures,
        error=error,
    )


def run_all(
    client: client_mod.FilmApiClient,
    settings: settings_mod.Settings,
    fixture: postgres.PostgresFixture | None = None,
) -> list[ScenarioResult]:
    """
    Run every scenario in order.

    The setup scenario needs the database fixture and is skipped without
    one. A connection failure fails the scenario it happened in; later
    scenarios still run.
    """
    expectations = settings.expectations
    scenarios: list[tuple[str, _typing.Callable[[], object]]] = []

    if fixture is not None:
        scenarios.append(("setup", lambda: check_setup(client, fixture, settings)))

    prefix = prefix_query(expectations)
    empty = empty_query(expectations)
    scenarios.extend(
        [
            (
                f"films starting with {prefix.starts_with!r}",
                lambda: check_films_starting_with(client, prefix),
            ),
            (
                "performance",
                lambda: check_performance(client, prefix, expectations.performance_threshold_ms),
            ),
            (
                f"empty results for {empty.starts_with!r}",
                lambda: check_empty_results(client, empty),
            ),
        ]
    )
    for value in expectations.invalid_values:
        scenarios.append(
            (
                f"invalid parameter {value!r}",
                lambda value=value: check_invalid_parameter(client, value),
            )
        )

    return [run_scenario(name, scenario) for name, scenario in scenarios]
