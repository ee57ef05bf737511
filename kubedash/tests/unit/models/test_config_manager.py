"""Tests for settings validation and YAML persistence."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from kubedash.models.state.app_settings import AppSettings, ConfigLoadError, ConfigSaveError
from kubedash.models.state.config_manager import ConfigManager, default_settings_path


class TestAppSettings:
    """Tests for AppSettings validation."""

    def test_defaults(self) -> None:
        settings = AppSettings()
        assert settings.fast_poll_interval == 5.0
        assert settings.slow_poll_interval == 10.0
        assert settings.log_poll_interval == 3.0
        assert settings.max_stale_failures is None
        assert settings.usage_history_size == 20
        assert settings.kubectl_path == "kubectl"

    @pytest.mark.parametrize("value", [0.5, 301.0])
    def test_interval_out_of_range(self, value: float) -> None:
        with pytest.raises(ValidationError):
            AppSettings(fast_poll_interval=value)

    def test_validate_assignment(self) -> None:
        settings = AppSettings()
        with pytest.raises(ValidationError):
            settings.usage_history_size = 1

    def test_stale_failures_minimum(self) -> None:
        with pytest.raises(ValidationError):
            AppSettings(max_stale_failures=0)
        assert AppSettings(max_stale_failures=3).max_stale_failures == 3


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_default_path_honours_xdg(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert default_settings_path() == tmp_path / "kubedash" / "settings.yaml"

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert ConfigManager(tmp_path / "absent.yaml").load() == AppSettings()

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("", encoding="utf-8")
        assert ConfigManager(path).load() == AppSettings()

    def test_save_then_load(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "settings.yaml"
        manager = ConfigManager(path)

        manager.save(AppSettings(fast_poll_interval=2.0, default_context="prod"))

        assert yaml.safe_load(path.read_text(encoding="utf-8"))["default_context"] == "prod"
        loaded = manager.load()
        assert loaded.fast_poll_interval == 2.0
        assert loaded.default_context == "prod"

    def test_partial_file_keeps_other_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("slow_poll_interval: 30\n", encoding="utf-8")

        settings = ConfigManager(path).load()

        assert settings.slow_poll_interval == 30.0
        assert settings.fast_poll_interval == 5.0

    def test_non_mapping_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError):
            ConfigManager(path).load()

    def test_invalid_values_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("fast_poll_interval: 0\n", encoding="utf-8")
        with pytest.raises(ConfigLoadError):
            ConfigManager(path).load()

    def test_load_or_default(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("{unclosed", encoding="utf-8")
        assert ConfigManager(path).load_or_default() == AppSettings()

    def test_save_failure(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        with pytest.raises(ConfigSaveError):
            ConfigManager(blocker / "settings.yaml").save(AppSettings())
