"""Tests for response and fixture validation helpers."""

import typing as _typing

import httpx as _httpx
import pytest as _pytest

import filmcheck.client as client
import filmcheck.config as config
import filmcheck.fixture.docker as docker
import filmcheck.fixture.errors as fixture_errors
import filmcheck.fixture.postgres as postgres
import filmcheck.fixture.seed as seed
import filmcheck.validation as validation
import tests.conftest as conftest

QUERY_A = client.FilmQuery("A", 46)
QUERY_X = client.FilmQuery("X", 0)


def _response(
    body: _typing.Any,
    *,
    status_code: int = 200,
    content_type: str = "application/json",
) -> client.ClientResponse:
    return client.ClientResponse(
        status_code=status_code,
        headers=_httpx.Headers({"content-type": content_type}),
        body=body,
        elapsed_ms=3.0,
    )


def _body(prefix: str = "A") -> dict[str, _typing.Any]:
    films = [row for row in seed.film_rows() if str(row["title"]).startswith(prefix)]
    return {"films": films, "count": len(films), "filter": {"startsWith": prefix}}


class TestSuccessfulResponse:
    def test_passes(self) -> None:
        validation.validate_successful_response(_response(_body()))

    def test_reports_all_problems(self) -> None:
        response = _response(None, status_code=500, content_type="text/html")
        with _pytest.raises(validation.AssertionFailure) as exc_info:
            validation.validate_successful_response(response)
        failures = exc_info.value.failures
        assert len(failures) == 3
        assert failures[0] == "status code: expected 200, got 500"


class TestApiResponseStructure:
    def test_passes(self) -> None:
        validation.validate_api_response_structure(_response(_body()), QUERY_A)

    def test_count_mismatch(self) -> None:
        with _pytest.raises(validation.AssertionFailure, match="count: expected 46, got 5"):
            validation.validate_api_response_structure(_response(_body("B")), QUERY_A)

    def test_filter_must_echo_input(self) -> None:
        body = {**_body(), "filter": {"startsWith": "a"}}
        with _pytest.raises(validation.AssertionFailure, match="filter.startsWith"):
            validation.validate_api_response_structure(_response(body), QUERY_A)

    def test_count_must_equal_films_length(self) -> None:
        body = _body()
        body["films"] = body["films"][:-1]
        with _pytest.raises(validation.AssertionFailure) as exc_info:
            validation.validate_api_response_structure(_response(body), QUERY_A)
        assert exc_info.value.failures == [
            "count should equal number of films: expected 45, got 46"
        ]

    def test_missing_and_extra_keys(self) -> None:
        body = {"films": [], "total": 0}
        with _pytest.raises(validation.AssertionFailure) as exc_info:
            validation.validate_api_response_structure(_response(body), QUERY_X)
        text = str(exc_info.value)
        assert "['count', 'filter']" in text
        assert "['total']" in text

    def test_non_object_body(self) -> None:
        with _pytest.raises(validation.AssertionFailure, match="JSON object"):
            validation.validate_api_response_structure(_response([1, 2]), QUERY_A)


class TestFilmDataIntegrity:
    def test_passes(self) -> None:
        validation.validate_film_data_integrity(_response(_body()), expected_size=46)

    def test_null_and_missing_fields(self) -> None:
        body = {
            "films": [{"film_id": None, "title": "ALIEN CENTER"}, {"film_id": 3}, "oops"],
            "count": 3,
            "filter": {"startsWith": "A"},
        }
        with _pytest.raises(validation.AssertionFailure) as exc_info:
            validation.validate_film_data_integrity(_response(body))
        assert exc_info.value.failures == [
            "films[0].film_id should not be null",
            "films[1] is missing 'title'",
            "films[2] should be an object, got 'oops'",
        ]

    def test_size_mismatch(self) -> None:
        with _pytest.raises(validation.AssertionFailure, match="number of films"):
            validation.validate_film_data_integrity(_response(_body("B")), expected_size=46)


class TestTitlesStartWith:
    def test_passes(self) -> None:
        validation.validate_all_titles_start_with(_response(_body()), "A")

    def test_case_insensitive(self) -> None:
        body = {"films": [{"film_id": 1, "title": "academy dinosaur"}], "count": 1, "filter": {}}
        validation.validate_all_titles_start_with(_response(body), "A")

    def test_wrong_prefix_reported(self) -> None:
        with _pytest.raises(validation.AssertionFailure) as exc_info:
            validation.validate_all_titles_start_with(_response(_body("B")), "A")
        assert len(exc_info.value.failures) == 5
        assert "'BABY HALL' should start with 'A'" in exc_info.value.failures[0]

    def test_non_string_title(self) -> None:
        body = {"films": [{"film_id": 1, "title": 7}], "count": 1, "filter": {}}
        with _pytest.raises(validation.AssertionFailure, match="should be a string"):
            validation.validate_all_titles_start_with(_response(body), "A")


class TestEmptyResponse:
    def test_passes(self) -> None:
        validation.validate_empty_response(_response(_body("X")), QUERY_X)

    def test_films_present(self) -> None:
        with _pytest.raises(validation.AssertionFailure) as exc_info:
            validation.validate_empty_response(_response(_body("B")), client.FilmQuery("B", 0))
        assert len(exc_info.value.failures) == 2

    def test_filter_missing_key(self) -> None:
        body = {"films": [], "count": 0, "filter": {}}
        with _pytest.raises(validation.AssertionFailure, match="should contain 'startsWith'"):
            validation.validate_empty_response(_response(body), QUERY_X)


class TestStructureConsistency:
    def test_passes(self) -> None:
        validation.validate_response_structure_consistency(_response(_body()))

    def test_bool_count_is_not_integer(self) -> None:
        body = {**_body(), "count": True}
        with _pytest.raises(validation.AssertionFailure, match="'count' should be an integer"):
            validation.validate_response_structure_consistency(_response(body))

    def test_all_wrong_types(self) -> None:
        body = {"films": {}, "count": "46", "filter": []}
        with _pytest.raises(validation.AssertionFailure) as exc_info:
            validation.validate_response_structure_consistency(_response(body))
        assert len(exc_info.value.failures) == 3


class TestBadRequest:
    def test_passes(self) -> None:
        validation.validate_bad_request(_response(None, status_code=400), "@")

    def test_ok_status_fails(self) -> None:
        with _pytest.raises(validation.AssertionFailure, match="'123' should return HTTP 400"):
            validation.validate_bad_request(_response(_body()), "123")


class TestPerformance:
    def test_passes(self) -> None:
        validation.validate_performance(client.PerformanceMetrics(120.0, 46), 2000, 46)

    def test_too_slow(self) -> None:
        metrics = client.PerformanceMetrics(2500.0, 46)
        with _pytest.raises(validation.AssertionFailure, match="but was 2500 ms"):
            validation.validate_performance(metrics, 2000, 46)

    def test_threshold_is_exclusive(self) -> None:
        with _pytest.raises(validation.AssertionFailure):
            validation.validate_performance(client.PerformanceMetrics(2000.0, 46), 2000, 46)

    def test_count_mismatch(self) -> None:
        with _pytest.raises(validation.AssertionFailure, match="result count"):
            validation.validate_performance(client.PerformanceMetrics(5.0, 0), 2000, 46)


class TestFixtureChecks:
    def test_running_fixture_passes(self, started_fixture: postgres.PostgresFixture) -> None:
        validation.validate_fixture_running(started_fixture, "testdb", "testuser")
        validation.validate_connection_uri(started_fixture, "testdb")

    def test_wrong_database_name(self, started_fixture: postgres.PostgresFixture) -> None:
        with _pytest.raises(validation.AssertionFailure, match="database name"):
            validation.validate_fixture_running(started_fixture, "films", "testuser")

    def test_seed_loaded(self, started_fixture: postgres.PostgresFixture) -> None:
        validation.validate_seed_loaded(started_fixture, 51)

    def test_seed_count_mismatch(self, started_fixture: postgres.PostgresFixture) -> None:
        with _pytest.raises(validation.AssertionFailure, match="should have 46 rows in film"):
            validation.validate_seed_loaded(started_fixture, 46)

    @_pytest.mark.parametrize("output", ["151\n", "510\n", " count \n-------\n    51\n(1 row)\n"])
    def test_seed_count_must_match_exactly(
        self,
        database_config: config.DatabaseConfig,
        output: str,
    ) -> None:
        fake = conftest.FakeDockerCLI(psql_result=docker.ExecResult(0, output, ""))
        with postgres.PostgresFixture(database_config, docker_cli=fake) as db:
            with _pytest.raises(validation.AssertionFailure, match="should have 51 rows"):
                validation.validate_seed_loaded(db, 51)

    def test_seed_count_uses_tuples_only_output(
        self,
        started_fixture: postgres.PostgresFixture,
        fake_docker: conftest.FakeDockerCLI,
    ) -> None:
        validation.validate_seed_loaded(started_fixture, 51)
        psql_call = fake_docker.calls[-1]
        assert "-tA" in psql_call
        assert psql_call[-1] == "SELECT COUNT(*) FROM film;"

    def test_seed_query_failure_reports_stderr(
        self,
        database_config: config.DatabaseConfig,
    ) -> None:
        fake = conftest.FakeDockerCLI(
            psql_result=docker.ExecResult(2, "", 'relation "film" does not exist')
        )
        with postgres.PostgresFixture(database_config, docker_cli=fake) as db:
            with _pytest.raises(validation.AssertionFailure) as exc_info:
                validation.validate_seed_loaded(db, 51)
        assert len(exc_info.value.failures) == 2
        assert "does not exist" in exc_info.value.failures[0]

    def test_seed_check_on_stopped_fixture(self) -> None:
        db = postgres.PostgresFixture(docker_cli=conftest.FakeDockerCLI())
        with _pytest.raises(fixture_errors.FixtureCommandError):
            validation.validate_seed_loaded(db, 51)
