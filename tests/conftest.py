"""
Shared pytest fixtures for filmcheck tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports. The fake service and
fake Docker client are importable as `tests.conftest.FakeFilmService` and
`tests.conftest.FakeDockerCLI`.
"""

import os as _os
import typing as _typing
import unittest.mock as _mock

import click.testing as _click_testing
import httpx as _httpx
import pytest as _pytest

import filmcheck.client as client
import filmcheck.config as config
import filmcheck.constants as constants
import filmcheck.fixture.docker as docker
import filmcheck.fixture.postgres as postgres
import filmcheck.fixture.seed as seed

FAKE_BASE_URL = "http://films.test:8080"
FAKE_CONTAINER_ID = "3f1c2d9a8b7e6f5a4b3c2d1e0f9a8b7c"


# =============================================================================
# Environment isolation
# =============================================================================


@_pytest.fixture
def clean_env() -> dict[str, str]:
    """
    Return environment dict with all FILMCHECK_* keys removed.

    Use with mock.patch.dict to isolate tests from the actual environment.
    """
    return {k: v for k, v in _os.environ.items() if not k.startswith("FILMCHECK_")}


@_pytest.fixture
def isolated_env(clean_env: dict[str, str]):
    """
    Context manager that isolates tests from environment variables.

    Usage:
        def test_something(isolated_env):
            with isolated_env:
                settings = config.Settings.construct_without_dotenv()
    """
    return _mock.patch.dict(_os.environ, clean_env, clear=True)


@_pytest.fixture
def clean_settings(isolated_env, tmp_path, monkeypatch) -> config.Settings:
    """
    Settings instance isolated from environment, .env and filmcheck.yaml.

    This fixture ensures tests get predictable default settings.
    """
    monkeypatch.chdir(tmp_path)
    with isolated_env:
        return config.Settings.construct_without_dotenv()


# =============================================================================
# Fake Film Query service
# =============================================================================


class FakeFilmService:
    """
    In-process stand-in for the Film Query API, served via httpx.MockTransport.

    Accepts a single ASCII letter as `startsWith` and rejects anything else
    with 400. `transform` lets a test corrupt the success body to exercise
    the validators.
    """

    def __init__(
        self,
        films: list[dict[str, _typing.Any]] | None = None,
        *,
        transform: _typing.Callable[[dict[str, _typing.Any]], _typing.Any] | None = None,
        content_type: str | None = None,
        fail_with: Exception | None = None,
    ) -> None:
        self.films = films if films is not None else seed.film_rows()
        self.transform = transform
        self.content_type = content_type
        self.fail_with = fail_with
        self.requests: list[_httpx.Request] = []

    @staticmethod
    def is_valid(value: str) -> bool:
        return len(value) == 1 and value.isascii() and value.isalpha()

    def handle(self, request: _httpx.Request) -> _httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with

        if request.url.path != constants.API_BASE_PATH:
            return _httpx.Response(404, json={"status": 404, "error": "Not Found"})

        value = request.url.params.get(constants.STARTS_WITH_PARAM)
        if value is None or not self.is_valid(value):
            return _httpx.Response(
                400,
                json={
                    "status": 400,
                    "error": "Bad Request",
                    "path": constants.API_BASE_PATH,
                },
            )

        matches = [
            film for film in self.films if str(film["title"]).lower().startswith(value.lower())
        ]
        body: _typing.Any = {
            "films": matches,
            "count": len(matches),
            "filter": {constants.STARTS_WITH_PARAM: value},
        }
        if self.transform is not None:
            body = self.transform(body)

        if self.content_type is not None:
            return _httpx.Response(
                200,
                content=str(body).encode(),
                headers={"content-type": self.content_type},
            )
        return _httpx.Response(200, json=body)

    def transport(self) -> _httpx.MockTransport:
        return _httpx.MockTransport(self.handle)

    def client(self) -> client.FilmApiClient:
        return client.FilmApiClient(FAKE_BASE_URL, transport=self.transport())


@_pytest.fixture
def fake_service() -> FakeFilmService:
    return FakeFilmService()


@_pytest.fixture
def fake_client(
    fake_service: FakeFilmService,
) -> _typing.Generator[client.FilmApiClient, None, None]:
    api_client = fake_service.client()
    yield api_client
    api_client.close()


# =============================================================================
# Fake Docker CLI
# =============================================================================


class FakeDockerCLI(docker.DockerCLI):
    """
    Scripted `docker` client for PostgresFixture tests.

    Answers run/port/inspect/logs/rm/exec like a healthy daemon. Readiness
    probes succeed from the `ready_after`-th attempt (None = never).
    `raise_on` maps a subcommand, an exec program or "seed" to an exception
    raised in place of answering.
    """

    def __init__(
        self,
        *,
        ready_after: int | None = 1,
        running: bool = True,
        run_result: docker.ExecResult | None = None,
        port_output: str = "0.0.0.0:49153\n[::]:49153\n",
        seed_result: docker.ExecResult | None = None,
        psql_result: docker.ExecResult | None = None,
        raise_on: dict[str, Exception] | None = None,
    ) -> None:
        super().__init__("docker")
        self.ready_after = ready_after
        self.running = running
        self.run_result = run_result or docker.ExecResult(0, FAKE_CONTAINER_ID + "\n", "")
        self.port_output = port_output
        self.seed_result = seed_result or docker.ExecResult(0, "CREATE TABLE\nINSERT 0 51\n", "")
        self.psql_result = psql_result or docker.ExecResult(0, "51\n", "")
        self.calls: list[tuple[str, ...]] = []
        self.seed_inputs: list[str | None] = []
        self.removed: list[str] = []
        self.probes = 0
        self.raise_on = raise_on or {}

    def run(self, *args: str, input_text: str | None = None) -> docker.ExecResult:
        self.calls.append(args)
        command = args[0]
        key = command
        if command == "exec":
            key = "seed" if "--interactive" in args else args[2]
        if key in self.raise_on:
            raise self.raise_on[key]

        if command == "run":
            return self.run_result
        if command == "port":
            return docker.ExecResult(0, self.port_output, "")
        if command == "inspect":
            return docker.ExecResult(0, "true\n" if self.running else "false\n", "")
        if command == "logs":
            return docker.ExecResult(0, "database system is ready\n", "")
        if command == "rm":
            self.removed.append(args[-1])
            return docker.ExecResult(0, args[-1] + "\n", "")
        if command == "exec":
            if "--interactive" in args:
                self.seed_inputs.append(input_text)
                return self.seed_result
            program = args[2]
            if program == "pg_isready":
                self.probes += 1
                ready = self.ready_after is not None and self.probes >= self.ready_after
                return docker.ExecResult(0 if ready else 2, "", "")
            if program == "psql":
                return self.psql_result
            return docker.ExecResult(0, "", "")

        return docker.ExecResult(1, "", f"unexpected docker call: {args}")

    def commands(self, name: str) -> list[tuple[str, ...]]:
        """All recorded calls for one docker subcommand."""
        return [call for call in self.calls if call[0] == name]


@_pytest.fixture
def fake_docker() -> FakeDockerCLI:
    return FakeDockerCLI()


@_pytest.fixture
def database_config() -> config.DatabaseConfig:
    """Fast-polling database settings for fixture tests."""
    return config.DatabaseConfig(startup_timeout=0.2, poll_interval=0.01)


@_pytest.fixture
def started_fixture(
    database_config: config.DatabaseConfig,
    fake_docker: FakeDockerCLI,
) -> _typing.Generator[postgres.PostgresFixture, None, None]:
    """A PostgresFixture started against the fake Docker client."""
    db = postgres.PostgresFixture(database_config, docker_cli=fake_docker)
    db.start()
    yield db
    db.stop()


@_pytest.fixture
def cli_runner(clean_env: dict[str, str]) -> _click_testing.CliRunner:
    """Click test runner with FILMCHECK_* variables removed."""
    return _click_testing.CliRunner(env={k: None for k in _os.environ if k not in clean_env})
