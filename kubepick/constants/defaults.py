"""Default values for settings.

All default values used in the Settings model and validation fallback values.
"""

from typing import Final

# ============================================================================
# Cache defaults
# ============================================================================

CACHE_TTL_DEFAULT: Final = 30  # seconds
AUTO_REFRESH_DEFAULT: Final = True
AUTO_REFRESH_INTERVAL_DEFAULT: Final = 30  # seconds

# ============================================================================
# Log output defaults
# ============================================================================

LOG_OUTPUT_DEFAULT: Final = "stream_buffer"
LOG_FOLLOW_MODE_DEFAULT: Final = True
LOG_BUFFER_MAX_LINES_DEFAULT: Final = 10000
LOG_TAIL_LINES_DEFAULT: Final = 100
TMUX_SPLIT_CMD_DEFAULT: Final = "tmux split-window -h '%s; read'"

# ============================================================================
# Notification defaults
# ============================================================================

LOG_LEVEL_DEFAULT: Final = "INFO"
NOTIFY_TIMEOUT_DEFAULT: Final = 5.0  # seconds

# ============================================================================
# Namespace defaults
# ============================================================================

NAMESPACE_MODE_DEFAULT: Final = "current"
DEFAULT_NAMESPACE: Final = "default"

__all__ = [
    "AUTO_REFRESH_DEFAULT",
    "AUTO_REFRESH_INTERVAL_DEFAULT",
    "CACHE_TTL_DEFAULT",
    "DEFAULT_NAMESPACE",
    "LOG_BUFFER_MAX_LINES_DEFAULT",
    "LOG_FOLLOW_MODE_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "LOG_OUTPUT_DEFAULT",
    "LOG_TAIL_LINES_DEFAULT",
    "NAMESPACE_MODE_DEFAULT",
    "NOTIFY_TIMEOUT_DEFAULT",
    "TMUX_SPLIT_CMD_DEFAULT",
]
