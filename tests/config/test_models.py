"""Tests for configuration section models."""

import pytest
from pydantic import ValidationError

from reqbind.config.models import BindingConfig, PluginsConfig, ReqbindConfig


class TestDefaults:
    def test_binding(self) -> None:
        cfg = BindingConfig()
        assert cfg.name_converter == "snake"
        assert cfg.mapping_path is None

    def test_plugins(self) -> None:
        assert PluginsConfig().enabled is True

    def test_root(self) -> None:
        cfg = ReqbindConfig()
        assert cfg.binding == BindingConfig()
        assert cfg.mapping == {}


class TestValidation:
    def test_frozen(self) -> None:
        cfg = BindingConfig()
        with pytest.raises(ValidationError):
            cfg.name_converter = "kebab"  # type: ignore[misc]

    def test_mapping_must_be_nested_tables(self) -> None:
        with pytest.raises(ValidationError):
            ReqbindConfig.model_validate({"mapping": {"app.ShowUser": "path"}})
