"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, reqbind.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- reqbind.toml sections ---


class BindingConfig(BaseModel):
    """[binding] section."""

    model_config = {"frozen": True}

    name_converter: str = "snake"
    mapping_path: str | None = None


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True


class ReqbindConfig(BaseModel):
    """Root configuration composing all sections.

    ``mapping`` inlines a source mapping table; entries there replace
    same-route entries loaded from ``binding.mapping_path``.
    """

    model_config = {"frozen": True}

    binding: BindingConfig = Field(default_factory=BindingConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    mapping: dict[str, dict[str, dict[str, str]]] = Field(default_factory=dict)
