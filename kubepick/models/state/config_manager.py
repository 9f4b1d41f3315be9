"""Settings persistence and snapshot replacement.

``ConfigManager`` owns the current ``Settings`` snapshot. Readers always get a
complete, frozen snapshot; ``setup`` and ``load`` swap in a new one.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from kubepick.constants.values import CONFIG_DIR_NAME, CONFIG_FILE_NAME, CONFIG_PATH_ENV
from kubepick.exceptions import ConfigError, ConfigLoadError, ConfigSaveError
from kubepick.models.state.app_settings import Settings

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    """Return the settings file path, honoring ``KUBEPICK_CONFIG``."""
    override = os.environ.get(CONFIG_PATH_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    config_home = os.environ.get("XDG_CONFIG_HOME", "").strip()
    base = Path(config_home).expanduser() if config_home else Path.home() / ".config"
    return base / CONFIG_DIR_NAME / CONFIG_FILE_NAME


class ConfigManager:
    """Holds the active settings snapshot and reads/writes it as YAML."""

    def __init__(self, path: Path | None = None, settings: Settings | None = None) -> None:
        self.path = path or default_config_path()
        self._settings = settings or Settings()

    @property
    def settings(self) -> Settings:
        """The current snapshot."""
        return self._settings

    def setup(self, **overrides: Any) -> Settings:
        """Build a snapshot from defaults plus ``overrides`` and replace the current one.

        Raises:
            ConfigError: If an override fails validation. The previous
                snapshot stays active.
        """
        try:
            settings = Settings.model_validate(overrides)
        except ValidationError as exc:
            raise ConfigError(f"Invalid settings: {exc}") from exc
        self._settings = settings
        logger.debug("Settings replaced: %s", settings.model_dump(mode="json"))
        return settings

    def load(self) -> Settings:
        """Load settings from ``self.path``; a missing file yields defaults.

        Raises:
            ConfigLoadError: If the file cannot be read or does not validate.
        """
        if not self.path.exists():
            logger.debug("No settings file at %s, using defaults", self.path)
            self._settings = Settings()
            return self._settings

        try:
            with self.path.open(encoding="utf-8") as handle:
                raw = yaml.safe_load(handle) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigLoadError(f"Failed to read settings from {self.path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigLoadError(f"Settings file {self.path} must contain a mapping")

        try:
            self._settings = Settings.model_validate(raw)
        except ValidationError as exc:
            raise ConfigLoadError(f"Invalid settings in {self.path}: {exc}") from exc

        logger.info("Loaded settings from %s", self.path)
        return self._settings

    def save(self, settings: Settings | None = None) -> None:
        """Write ``settings`` (or the current snapshot) to ``self.path``.

        Raises:
            ConfigSaveError: If the file cannot be written.
        """
        snapshot = settings or self._settings
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as handle:
                yaml.safe_dump(snapshot.model_dump(mode="json"), handle, sort_keys=True)
        except OSError as exc:
            raise ConfigSaveError(f"Failed to save settings to {self.path}: {exc}") from exc
        self._settings = snapshot


__all__ = [
    "ConfigManager",
    "default_config_path",
]
