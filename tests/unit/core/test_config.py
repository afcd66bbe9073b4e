"""Unit tests for application configuration."""

import tomllib
from pathlib import Path

import pytest

from psmodctl.core.config import (
    AppConfig,
    ConfigError,
    ConfigParseError,
    load_config,
    save_config,
)
from psmodctl.core.theme import ThemeColors


class TestAppConfig:
    """Tests for AppConfig model."""

    def test_defaults(self) -> None:
        """Defaults match the documented behaviour."""
        config = AppConfig()
        assert config.provider == "auto"
        assert config.pwsh_executable == "pwsh"
        assert config.keep_versions == 1
        assert config.include_prerelease is False
        assert config.trust_repository is True
        assert config.module_paths == []
        assert config.unknown_scope_as_system is False

    def test_rejects_unknown_keys(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValueError):
            AppConfig.model_validate({"colour": "red"})

    def test_rejects_bad_values(self) -> None:
        """Out-of-range values are rejected."""
        with pytest.raises(ValueError):
            AppConfig(keep_versions=0)
        with pytest.raises(ValueError):
            AppConfig.model_validate({"provider": "chocolatey"})


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        """A missing file yields the defaults."""
        assert load_config(tmp_path / "missing.toml") == AppConfig()

    def test_loads_values(self, tmp_path: Path) -> None:
        """Values from the file override the defaults."""
        path = tmp_path / "config.toml"
        path.write_text(
            'provider = "powershellget"\n'
            "keep_versions = 3\n"
            'module_paths = ["D:/Modules"]\n'
            "\n[theme]\n"
            'success = "#00ff00"\n'
        )

        config = load_config(path)

        assert config.provider == "powershellget"
        assert config.keep_versions == 3
        assert config.module_paths == ["D:/Modules"]
        assert config.theme.success == "#00ff00"
        assert config.theme.error == ThemeColors().error

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("provider = \n")
        with pytest.raises(ConfigParseError, match="Invalid TOML"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("keep_versions = 0\n")
        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_invalid_theme_color(self, tmp_path: Path) -> None:
        """Theme colors must be hex codes."""
        path = tmp_path / "config.toml"
        path.write_text('[theme]\nsuccess = "green"\n')
        with pytest.raises(ConfigError):
            load_config(path)

    def test_default_path_from_env(self, isolated_config: Path) -> None:
        """Without an explicit path the XDG location is used."""
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("keep_versions = 2\n")
        assert load_config().keep_versions == 2


class TestSaveConfig:
    """Tests for save_config function."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        path = tmp_path / "nested" / "config.toml"
        config = AppConfig(provider="psresourceget", keep_versions=2, module_paths=["/m"])

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config
        with open(path, "rb") as f:
            assert tomllib.load(f)["keep_versions"] == 2

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """The temporary file is moved into place."""
        save_config(AppConfig(), tmp_path / "config.toml")
        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_write_failure(self, tmp_path: Path) -> None:
        """Unwritable destinations raise ConfigError."""
        blocker = tmp_path / "file"
        blocker.write_text("")
        with pytest.raises(ConfigError, match="Failed to write"):
            save_config(AppConfig(), blocker / "config.toml")
