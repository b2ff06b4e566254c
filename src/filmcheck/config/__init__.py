"""
Configuration module for filmcheck.

Uses pydantic-settings for environment variable loading.
"""

from filmcheck.config.settings import Settings
from filmcheck.config.sources import ConfigFileError
from filmcheck.config.types import (
    DatabaseConfig,
    ExpectationsConfig,
    LoggingConfig,
    ServiceConfig,
)

__all__ = [
    "ConfigFileError",
    "DatabaseConfig",
    "ExpectationsConfig",
    "LoggingConfig",
    "ServiceConfig",
    "Settings",
]
