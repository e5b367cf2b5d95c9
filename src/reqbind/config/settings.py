"""ReqbindSettings: one frozen object built from every configuration layer.

Layers, strongest first:

1. keyword arguments (CLI flags, or values passed by an embedding app)
2. ``REQBIND_*`` environment variables, ``__`` for nested keys
   (``REQBIND_BINDING__NAME_CONVERTER=kebab``)
3. ``reqbind.toml``, found by :func:`reqbind.config.discovery.find_config`
4. defaults declared on the section models

The TOML layer is a custom pydantic-settings source.  The file is parsed
once in :meth:`ReqbindSettings.from_cli` and handed to the source through a
context variable, since pydantic-settings builds sources inside
``__init__``.
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from reqbind.config.discovery import find_config, read_toml
from reqbind.config.models import BindingConfig, PluginsConfig
from reqbind.domain.errors import ConfigurationError

_toml_data: ContextVar[dict[str, Any] | None] = ContextVar("reqbind_toml_data", default=None)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Feeds an already-parsed ``reqbind.toml`` table into settings."""

    def __init__(self, settings_cls: type[BaseSettings], data: dict[str, Any] | None) -> None:
        super().__init__(settings_cls)
        self._data = data or {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


def _locate_config(config_path: str | None, project_root: Path | None) -> Path | None:
    if not config_path:
        return find_config(project_root)
    path = Path(config_path)
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {path}")
    return path


class ReqbindSettings(BaseSettings):
    """Settings for the binder wiring and the reqbind CLI.

    Attributes:
        project_root: Base for relative paths in the config.  The directory
            holding ``reqbind.toml``, or the CWD when there is none.
        config_path: The config file that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "REQBIND_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # CLI flags
    json_output: bool = False
    verbose: bool = False
    log_json: bool = False

    # reqbind.toml sections
    binding: BindingConfig = Field(default_factory=BindingConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    mapping: dict[str, dict[str, dict[str, str]]] = Field(default_factory=dict)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, TomlSettingsSource(settings_cls, _toml_data.get()))

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **overrides: Any,
    ) -> ReqbindSettings:
        """Build settings for a CLI run or an application startup.

        An explicit *config_path* must exist.  Otherwise ``reqbind.toml`` is
        searched upward from *project_root* (or the CWD).  *overrides* win
        over every other layer.

        Raises:
            ConfigurationError: The config file is missing or not valid TOML.
        """
        toml_path = _locate_config(config_path, project_root)
        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        token = _toml_data.set(read_toml(toml_path) if toml_path else None)
        try:
            return cls(project_root=project_root, config_path=toml_path, **overrides)
        finally:
            _toml_data.reset(token)

    def mapping_file(self) -> Path | None:
        """``binding.mapping_path`` resolved against the project root."""
        if not self.binding.mapping_path:
            return None
        path = Path(self.binding.mapping_path)
        return path if path.is_absolute() else self.project_root / path
