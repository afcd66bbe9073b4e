"""Unit tests for path management."""

from pathlib import Path

import pytest

from psmodctl.core.paths import get_config_dir, get_config_path


class TestPaths:
    """Tests for config path resolution."""

    def test_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """XDG_CONFIG_HOME is honoured."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / "psmodctl"
        assert get_config_path() == tmp_path / "psmodctl" / "config.toml"

    def test_default_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without XDG_CONFIG_HOME the config lives in ~/.config."""
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_config_dir() == tmp_path / ".config" / "psmodctl"

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """PSMODCTL_CONFIG takes precedence."""
        target = tmp_path / "custom.toml"
        monkeypatch.setenv("PSMODCTL_CONFIG", str(target))
        assert get_config_path() == target
