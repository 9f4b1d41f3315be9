"""Settings and namespace state."""

from kubepick.models.state.app_settings import Settings
from kubepick.models.state.config_manager import ConfigManager, default_config_path
from kubepick.models.state.namespace_state import NamespaceState

__all__ = ["ConfigManager", "NamespaceState", "Settings", "default_config_path"]
