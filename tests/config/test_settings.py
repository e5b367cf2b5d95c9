"""Tests for ReqbindSettings — unified settings with TOML source."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from reqbind.config.settings import ReqbindSettings
from reqbind.domain.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("REQBIND_CONFIG", "REQBIND_VERBOSE", "REQBIND_BINDING__NAME_CONVERTER"):
        monkeypatch.delenv(name, raising=False)


class TestReqbindSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = ReqbindSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.verbose is False
        assert settings.binding.name_converter == "snake"
        assert settings.plugins.enabled is True
        assert settings.mapping == {}
        assert settings.mapping_file() is None

    def test_frozen(self, tmp_path: Path) -> None:
        settings = ReqbindSettings.from_cli(project_root=tmp_path)
        with pytest.raises(ValidationError):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "reqbind.toml").write_text('[binding]\nname_converter = "kebab"\n')
        settings = ReqbindSettings.from_cli(project_root=tmp_path)
        assert settings.binding.name_converter == "kebab"
        assert settings.plugins.enabled is True  # default preserved

    def test_project_root_is_config_parent(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "reqbind.toml").write_text("")
        child = tmp_path / "src" / "app"
        child.mkdir(parents=True)
        monkeypatch.chdir(child)
        settings = ReqbindSettings.from_cli()
        assert settings.config_path == tmp_path / "reqbind.toml"
        assert settings.project_root == tmp_path

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[binding]\nmapping_path = "build/mapping.json"\n')
        settings = ReqbindSettings.from_cli(config_path=str(custom))
        assert settings.config_path == custom
        assert settings.project_root == custom.parent
        assert settings.mapping_file() == custom.parent / "build" / "mapping.json"

    def test_absolute_mapping_path(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere" / "mapping.json"
        (tmp_path / "reqbind.toml").write_text(f"[binding]\nmapping_path = '{target}'\n")
        settings = ReqbindSettings.from_cli(project_root=tmp_path)
        assert settings.mapping_file() == target

    def test_inline_mapping(self, tmp_path: Path) -> None:
        (tmp_path / "reqbind.toml").write_text('[mapping."app.ShowUser"."users:show"]\nuserId = "path"\n')
        settings = ReqbindSettings.from_cli(project_root=tmp_path)
        assert settings.mapping == {"app.ShowUser": {"users:show": {"userId": "path"}}}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "reqbind.toml").write_text("[binding\n")
        with pytest.raises(ConfigurationError):
            ReqbindSettings.from_cli(project_root=tmp_path)


class TestPriority:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = ReqbindSettings.from_cli(project_root=tmp_path, json_output=True, verbose=True)
        assert settings.json_output is True
        assert settings.verbose is True

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "reqbind.toml").write_text('[binding]\nname_converter = "kebab"\n')
        monkeypatch.setenv("REQBIND_BINDING__NAME_CONVERTER", "identity")
        settings = ReqbindSettings.from_cli(project_root=tmp_path)
        assert settings.binding.name_converter == "identity"

    def test_cli_flags_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REQBIND_VERBOSE", "true")
        settings = ReqbindSettings.from_cli(project_root=tmp_path, verbose=False)
        assert settings.verbose is False

    def test_cli_flags_override_toml(self, tmp_path: Path) -> None:
        (tmp_path / "reqbind.toml").write_text("json_output = true\n")
        settings = ReqbindSettings.from_cli(project_root=tmp_path, json_output=False)
        assert settings.json_output is False


class TestExplicitConfig:
    def test_missing_explicit_config(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Config file not found"):
            ReqbindSettings.from_cli(config_path=str(tmp_path / "absent.toml"))

    def test_explicit_config_skips_walk_up(self, tmp_path: Path) -> None:
        (tmp_path / "reqbind.toml").write_text('[binding]\nname_converter = "kebab"\n')
        custom = tmp_path / "other.toml"
        custom.write_text("")
        settings = ReqbindSettings.from_cli(config_path=str(custom))
        assert settings.binding.name_converter == "snake"
