"""Settings persistence as a YAML file."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from kubedash.constants.defaults import SETTINGS_DIR_NAME, SETTINGS_FILE_NAME
from kubedash.models.state.app_settings import (
    AppSettings,
    ConfigError,
    ConfigLoadError,
    ConfigSaveError,
)

logger = logging.getLogger(__name__)


def default_settings_path() -> Path:
    """Return ``$XDG_CONFIG_HOME/kubedash/settings.yaml`` (or ``~/.config``)."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME


class ConfigManager:
    """Loads and saves AppSettings."""

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else default_settings_path()

    def load(self) -> AppSettings:
        """Load settings, falling back to defaults when the file is absent.

        Raises:
            ConfigLoadError: If the file exists but is unreadable or invalid.
        """
        if not self.path.exists():
            logger.debug("No settings file at %s; using defaults", self.path)
            return AppSettings()

        try:
            raw = yaml.safe_load(self.path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigLoadError(f"Failed to read settings from {self.path}: {e}") from e

        if raw is None:
            return AppSettings()
        if not isinstance(raw, dict):
            raise ConfigLoadError(f"Settings file {self.path} must contain a mapping")

        try:
            return AppSettings.model_validate(raw)
        except ValidationError as e:
            raise ConfigLoadError(f"Invalid settings in {self.path}: {e}") from e

    def load_or_default(self) -> AppSettings:
        """Load settings, logging and ignoring any error."""
        try:
            return self.load()
        except ConfigError:
            logger.exception("Falling back to default settings")
            return AppSettings()

    def save(self, settings: AppSettings) -> None:
        """Write settings to disk.

        Raises:
            ConfigSaveError: If the file cannot be written.
        """
        payload = settings.model_dump(mode="json")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                yaml.safe_dump(payload, sort_keys=False, default_flow_style=False),
                encoding="utf-8",
            )
        except OSError as e:
            raise ConfigSaveError(f"Failed to save settings to {self.path}: {e}") from e
        logger.info("Saved settings to %s", self.path)


__all__ = [
    "AppSettings",
    "ConfigError",
    "ConfigLoadError",
    "ConfigManager",
    "ConfigSaveError",
    "default_settings_path",
]
