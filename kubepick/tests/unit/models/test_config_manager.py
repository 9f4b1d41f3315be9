"""Tests for Settings snapshots and ConfigManager persistence."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from kubepick.constants.enums import LogOutputMode, NamespaceMode
from kubepick.exceptions import ConfigError, ConfigLoadError, ConfigSaveError
from kubepick.models.state.app_settings import Settings
from kubepick.models.state.config_manager import ConfigManager, default_config_path

# =============================================================================
# Settings
# =============================================================================


class TestSettings:
    """Tests for the Settings model."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.cache_ttl == 30
        assert settings.auto_refresh is True
        assert settings.auto_refresh_interval == 30
        assert settings.log_output == LogOutputMode.STREAM_BUFFER
        assert settings.log_follow_mode is True
        assert settings.log_buffer_max_lines == 10000
        assert settings.log_tail_lines == 100
        assert settings.tmux_split_cmd == "tmux split-window -h '%s; read'"
        assert settings.namespace_mode == NamespaceMode.CURRENT

    def test_snapshot_is_frozen(self) -> None:
        settings = Settings()

        with pytest.raises(ValidationError):
            settings.cache_ttl = 5

    @pytest.mark.parametrize(
        "overrides",
        [
            {"cache_ttl": 0},
            {"auto_refresh_interval": 1},
            {"log_buffer_max_lines": 0},
            {"log_tail_lines": -1},
            {"log_output": "window"},
            {"notify_timeout": 0},
        ],
    )
    def test_rejects_out_of_range_values(self, overrides: dict) -> None:
        with pytest.raises(ValidationError):
            Settings(**overrides)

    def test_rejects_specific_namespace_mode(self) -> None:
        with pytest.raises(ValidationError, match="namespace_mode"):
            Settings(namespace_mode="specific")

    def test_log_level_is_normalized(self) -> None:
        assert Settings(log_level=" debug ").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")


# =============================================================================
# ConfigManager
# =============================================================================


class TestConfigManagerSetup:
    """Tests for snapshot replacement."""

    def test_setup_replaces_snapshot(self, config_manager: ConfigManager) -> None:
        before = config_manager.settings

        after = config_manager.setup(cache_ttl=60, log_output="external_terminal")

        assert config_manager.settings is after
        assert after is not before
        assert after.cache_ttl == 60
        assert after.log_output == LogOutputMode.EXTERNAL_TERMINAL
        assert before.cache_ttl == 30

    def test_setup_starts_from_defaults(self, config_manager: ConfigManager) -> None:
        config_manager.setup(cache_ttl=60)

        settings = config_manager.setup(auto_refresh=False)

        assert settings.cache_ttl == 30
        assert settings.auto_refresh is False

    def test_invalid_setup_keeps_previous_snapshot(self, config_manager: ConfigManager) -> None:
        previous = config_manager.setup(cache_ttl=45)

        with pytest.raises(ConfigError):
            config_manager.setup(cache_ttl=-1)

        assert config_manager.settings is previous


class TestConfigManagerPersistence:
    """Tests for load and save."""

    def test_missing_file_yields_defaults(self, config_manager: ConfigManager) -> None:
        settings = config_manager.load()

        assert settings == Settings()

    def test_save_then_load(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "settings.yaml"
        writer = ConfigManager(path=path)
        writer.setup(cache_ttl=90, log_follow_mode=False, namespace_mode="all")
        writer.save()

        loaded = ConfigManager(path=path).load()

        assert loaded.cache_ttl == 90
        assert loaded.log_follow_mode is False
        assert loaded.namespace_mode == NamespaceMode.ALL

    def test_saved_file_is_plain_yaml(self, config_manager: ConfigManager) -> None:
        config_manager.save()

        raw = yaml.safe_load(config_manager.path.read_text(encoding="utf-8"))

        assert raw["log_output"] == "stream_buffer"
        assert raw["namespace_mode"] == "current"

    def test_partial_file_fills_defaults(self, config_manager: ConfigManager) -> None:
        config_manager.path.write_text("cache_ttl: 12\n", encoding="utf-8")

        settings = config_manager.load()

        assert settings.cache_ttl == 12
        assert settings.log_tail_lines == 100

    def test_empty_file_yields_defaults(self, config_manager: ConfigManager) -> None:
        config_manager.path.write_text("", encoding="utf-8")

        assert config_manager.load() == Settings()

    def test_invalid_yaml_raises(self, config_manager: ConfigManager) -> None:
        config_manager.path.write_text("cache_ttl: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError):
            config_manager.load()

    def test_non_mapping_raises(self, config_manager: ConfigManager) -> None:
        config_manager.path.write_text("- 1\n- 2\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="mapping"):
            config_manager.load()

    def test_invalid_values_raise(self, config_manager: ConfigManager) -> None:
        config_manager.path.write_text("cache_ttl: 0\n", encoding="utf-8")

        with pytest.raises(ConfigLoadError, match="Invalid settings"):
            config_manager.load()

    def test_save_to_unwritable_path_raises(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        manager = ConfigManager(path=blocker / "settings.yaml")

        with pytest.raises(ConfigSaveError):
            manager.save()


class TestDefaultConfigPath:
    """Tests for default_config_path."""

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        target = tmp_path / "custom.yaml"
        monkeypatch.setenv("KUBEPICK_CONFIG", str(target))

        assert default_config_path() == target

    def test_xdg_config_home(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.delenv("KUBEPICK_CONFIG", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert default_config_path() == tmp_path / "kubepick" / "settings.yaml"
