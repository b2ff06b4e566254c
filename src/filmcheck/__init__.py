"""
filmcheck - Film Query API acceptance harness

Drives a running Film Query service over HTTP, checks its responses with
grouped assertions, and provisions a seeded PostgreSQL instance for it.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("filmcheck")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "filmcheck Contributors"

from filmcheck.client import FilmApiClient  # noqa: E402
from filmcheck.config import Settings  # noqa: E402
from filmcheck.fixture import PostgresFixture  # noqa: E402

__all__ = ["__version__", "__version_info__", "FilmApiClient", "PostgresFixture", "Settings"]
