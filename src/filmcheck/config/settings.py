"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with FILMCHECK_ prefix
3. .env file (FILMCHECK_ENV_FILE, if set and present)
4. YAML config file (FILMCHECK_CONFIG_FILE or ./filmcheck.yaml)
5. Field defaults (lowest)

Nested config uses double underscore delimiter:
  FILMCHECK_SERVICE__BASE_URL=http://localhost:8080
  FILMCHECK_DATABASE__STARTUP_TIMEOUT=120
"""

import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import filmcheck.config.sources as sources
import filmcheck.config.types as types


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    FILMCHECK_ENV_FILE names the file explicitly. If it is set but missing,
    nothing is loaded rather than silently falling back to ./.env.
    """
    env_file = _os.environ.get("FILMCHECK_ENV_FILE")
    if env_file and _pathlib.Path(env_file).exists():
        return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    filmcheck configuration settings.

    All settings can be overridden via environment variables with FILMCHECK_ prefix.
    For nested config, use double underscore: FILMCHECK_DATABASE__IMAGE=postgres:16
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="FILMCHECK_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="allow",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            sources.YamlSettingsSource(settings_cls),
            file_secret_settings,
        )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and CI environments.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    service: types.ServiceConfig = _pydantic.Field(default_factory=types.ServiceConfig)
    """Service under test."""

    database: types.DatabaseConfig = _pydantic.Field(default_factory=types.DatabaseConfig)
    """PostgreSQL fixture settings."""

    expectations: types.ExpectationsConfig = _pydantic.Field(
        default_factory=types.ExpectationsConfig
    )
    """Expected results for the acceptance scenarios."""

    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    """Logging settings."""

    # =========================================================================
    # Convenience accessors
    # =========================================================================

    @property
    def base_url(self) -> str:
        """Service base URL (alias to service.base_url)."""
        return self.service.base_url

    @property
    def log_level(self) -> int:
        """Numeric stdlib logging level for logging.level."""
        return _logging.getLevelName(self.logging.level.upper())  # type: ignore[no-any-return]

    def get_unknown_fields(self) -> dict[str, _typing.Any]:
        """
        Collect all config keys that are not part of the schema.

        Returns:
            Flat dict of dotted path -> value, e.g. {"database.imgae": "..."}.
        """
        result: dict[str, _typing.Any] = dict(self.model_extra or {})
        for section_name in ("service", "database", "expectations", "logging"):
            section = getattr(self, section_name)
            result.update(section.collect_all_extra_fields(section_name))
        return result

    def to_dict(self) -> dict[str, _typing.Any]:
        """Return the schema fields as plain data (for `config show`)."""
        return self.model_dump(
            mode="json",
            include={"service", "database", "expectations", "logging"},
        )
