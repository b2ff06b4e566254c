"""Custom pydantic-settings source for filmcheck configuration.

YamlSettingsSource loads an optional YAML config file and hands its
contents to pydantic for validation. It sits below environment variables
and the .env file in precedence.

Config file lookup:
1. FILMCHECK_CONFIG_FILE if set (must exist)
2. filmcheck.yaml in the current working directory
"""

import collections.abc as _abc
import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

# Environment variable for overriding the config file location
ENV_CONFIG_FILE = "FILMCHECK_CONFIG_FILE"

DEFAULT_CONFIG_FILENAME = "filmcheck.yaml"


class ConfigFileError(Exception):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


def get_config_path(cwd: _pathlib.Path | None = None) -> _pathlib.Path | None:
    """
    Resolve which config file to load.

    Returns:
        Path of the config file, or None if no file applies.

    Raises:
        ConfigFileError: If FILMCHECK_CONFIG_FILE names a missing file.
    """
    if explicit := _os.environ.get(ENV_CONFIG_FILE):
        path = _pathlib.Path(explicit).expanduser()
        if not path.exists():
            raise ConfigFileError(path, "file not found")
        return path

    candidate = (cwd or _pathlib.Path.cwd()) / DEFAULT_CONFIG_FILENAME
    return candidate if candidate.exists() else None


def load_yaml_file(path: _pathlib.Path) -> dict[str, _typing.Any]:
    """
    Load a YAML file and return its contents as a dict.

    Raises:
        ConfigFileError: If the file cannot be read, is malformed YAML,
            or contains non-dict content at the top level.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(path, f"cannot read file: {e}") from e

    try:
        parsed = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise ConfigFileError(path, f"invalid YAML: {e}") from e

    if parsed is None:
        return {}

    if not isinstance(parsed, dict):
        type_name = type(parsed).__name__
        raise ConfigFileError(
            path,
            f"config must be a YAML mapping (dict), got {type_name}",
        )

    return parsed


class YamlSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """Settings source backed by a single YAML file."""

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        config_path: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the settings source.

        Args:
            settings_cls: The Settings class being populated.
            config_path: Explicit config file (for testing). If not provided,
                uses get_config_path().
        """
        super().__init__(settings_cls)
        self._config_path = config_path if config_path is not None else get_config_path()
        self._data = load_yaml_file(self._config_path) if self._config_path else {}

    @property
    def config_path(self) -> _pathlib.Path | None:
        """The file that was loaded, if any."""
        return self._config_path

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,  # noqa: ARG002 - required by pydantic-settings interface
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, (_abc.Mapping, list))

    def __call__(self) -> dict[str, _typing.Any]:
        # Unknown keys are kept so Settings.model_extra can report them
        return dict(self._data)
