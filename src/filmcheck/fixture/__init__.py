"""
Database fixture for filmcheck.

Provides a disposable, seeded PostgreSQL instance driven through the
Docker CLI.
"""

from filmcheck.fixture.docker import DockerCLI, ExecResult
from filmcheck.fixture.errors import FixtureCommandError, FixtureError, FixtureStartupError
from filmcheck.fixture.postgres import PostgresFixture
from filmcheck.fixture.seed import FILM_TITLES, render_seed_sql

__all__ = [
    "DockerCLI",
    "ExecResult",
    "FILM_TITLES",
    "FixtureCommandError",
    "FixtureError",
    "FixtureStartupError",
    "PostgresFixture",
    "render_seed_sql",
]
