"""
Shared constants for filmcheck.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Service defaults
DEFAULT_BASE_URL = "http://localhost:8080"
"""Default base URL of the service under test."""

API_BASE_PATH = "/api/v1/films"
"""Path of the film query endpoint."""

STARTS_WITH_PARAM = "startsWith"
"""Name of the single query parameter (also echoed back in `filter`)."""

DEFAULT_REQUEST_TIMEOUT = 10.0
"""Default HTTP request timeout in seconds."""

# Response shape
RESPONSE_KEYS = frozenset({"films", "count", "filter"})
"""Exact set of top-level keys in a successful response body."""

FILM_ID_KEY = "film_id"
FILM_TITLE_KEY = "title"

# Expectations against the bundled fixture data
EXPECTED_FILMS_STARTING_WITH_A = 46
"""Films in the seed data whose title starts with 'A'."""

EXPECTED_TOTAL_FILMS = 51
"""Total rows in the seed `film` table."""

DEFAULT_PREFIX = "A"
DEFAULT_EMPTY_PREFIX = "X"

INVALID_STARTS_WITH_VALUES: tuple[str, ...] = ("", "ABC", "@", "123")
"""Values the service is known to reject with HTTP 400.

These are examples, not a validation rule: nothing else is asserted
about which inputs are rejected.
"""

PERFORMANCE_THRESHOLD_MS = 2000
"""Soft wall-clock threshold for a prefix query (milliseconds)."""

# Database fixture defaults
DEFAULT_POSTGRES_IMAGE = "postgres:15-alpine"
DEFAULT_DATABASE_NAME = "testdb"
DEFAULT_USERNAME = "testuser"
DEFAULT_PASSWORD = "testpass"
POSTGRES_PORT = 5432
"""Port PostgreSQL listens on inside the container."""

DEFAULT_STARTUP_TIMEOUT = 60.0
"""Seconds to wait for the database to accept connections."""

DEFAULT_POLL_INTERVAL = 0.5
"""Seconds between readiness probes."""

DEFAULT_CONTAINER_PREFIX = "filmcheck-pg"
