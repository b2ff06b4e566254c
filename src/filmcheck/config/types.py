"""Configuration type definitions for filmcheck settings.

This module defines the Pydantic models used to represent configuration
structures. These are "config section" types nested within the main
Settings class:

- ServiceConfig: base_url, api_path, timeout
- DatabaseConfig: image, credentials, startup timeout, seed file
- ExpectationsConfig: prefixes, expected counts, invalid values, threshold
- LoggingConfig: level

All types use `extra="allow"` so unknown keys survive validation and can be
reported with `get_extra_fields()`.
"""

import typing as _typing

import pydantic as _pydantic

import filmcheck.constants as _constants

# =============================================================================
# Base class with introspection
# =============================================================================


class ConfigBase(_pydantic.BaseModel):
    """
    Base class for all config types.

    Unknown fields are preserved rather than silently dropped, so typos in
    config files can be audited.
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Return fields that were provided but not in the schema."""
        return dict(self.model_extra) if self.model_extra else {}

    def has_extra_fields(self) -> bool:
        """Check if this config has any unrecognized fields."""
        return bool(self.model_extra)

    def collect_all_extra_fields(
        self,
        prefix: str = "",
    ) -> dict[str, _typing.Any]:
        """
        Recursively collect extra fields from this config and nested configs.

        Returns a flat dict with dotted paths as keys, e.g.:
            {"database.imgae": "postgres:16"}
        """
        result: dict[str, _typing.Any] = {}

        for key, value in self.get_extra_fields().items():
            path = f"{prefix}.{key}" if prefix else key
            result[path] = value

        for field_name in self.__class__.model_fields:
            value = getattr(self, field_name, None)
            if isinstance(value, ConfigBase):
                child_prefix = f"{prefix}.{field_name}" if prefix else field_name
                result.update(value.collect_all_extra_fields(child_prefix))

        return result


# =============================================================================
# Service Settings
# =============================================================================


class ServiceConfig(ConfigBase):
    """
    Service under test.

    YAML section: service.*
    """

    base_url: str = _constants.DEFAULT_BASE_URL
    """Base URL of the running service (scheme, host, port)."""

    api_path: str = _constants.API_BASE_PATH
    """Path of the film query endpoint."""

    timeout: float = _pydantic.Field(default=_constants.DEFAULT_REQUEST_TIMEOUT, gt=0)
    """HTTP request timeout in seconds."""

    @_pydantic.field_validator("base_url")
    @classmethod
    def _normalize_base_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {value!r}")
        return value.rstrip("/")

    @_pydantic.field_validator("api_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        return value if value.startswith("/") else f"/{value}"


# =============================================================================
# Database Settings
# =============================================================================


class DatabaseConfig(ConfigBase):
    """
    Disposable PostgreSQL fixture.

    YAML section: database.*
    """

    image: str = _constants.DEFAULT_POSTGRES_IMAGE
    """Docker image to run."""

    database_name: str = _constants.DEFAULT_DATABASE_NAME
    username: str = _constants.DEFAULT_USERNAME
    password: str = _constants.DEFAULT_PASSWORD

    host: str = "localhost"
    """Host name the published port is reachable on."""

    startup_timeout: float = _pydantic.Field(default=_constants.DEFAULT_STARTUP_TIMEOUT, gt=0)
    """Seconds to wait for the instance to accept connections."""

    poll_interval: float = _pydantic.Field(default=_constants.DEFAULT_POLL_INTERVAL, gt=0)
    """Seconds between readiness probes."""

    seed_file: str | None = None
    """SQL file replacing the bundled seed data. None = bundled films."""

    container_prefix: str = _constants.DEFAULT_CONTAINER_PREFIX
    """Prefix for generated container names."""


# =============================================================================
# Expectations
# =============================================================================


class ExpectationsConfig(ConfigBase):
    """
    Expected results for the acceptance scenarios.

    YAML section: expectations.*
    """

    prefix: str = _constants.DEFAULT_PREFIX
    prefix_count: int = _pydantic.Field(
        default=_constants.EXPECTED_FILMS_STARTING_WITH_A, ge=0
    )
    total_rows: int = _pydantic.Field(default=_constants.EXPECTED_TOTAL_FILMS, ge=0)
    empty_prefix: str = _constants.DEFAULT_EMPTY_PREFIX
    invalid_values: list[str] = _pydantic.Field(
        default_factory=lambda: list(_constants.INVALID_STARTS_WITH_VALUES)
    )
    performance_threshold_ms: int = _pydantic.Field(
        default=_constants.PERFORMANCE_THRESHOLD_MS, gt=0
    )


# =============================================================================
# Logging Settings
# =============================================================================


class LoggingConfig(ConfigBase):
    """
    Logging settings.

    YAML section: logging.*
    """

    level: _typing.Literal["debug", "info", "warning", "error"] = "info"
    """Log level."""
