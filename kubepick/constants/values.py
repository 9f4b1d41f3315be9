"""Scalar constants for kubepick.

All application-level constants with proper type hints using Final.
"""

from typing import Final

# ============================================================================
# Application
# ============================================================================

APP_TITLE: Final = "kubepick"
CONFIG_DIR_NAME: Final = "kubepick"
CONFIG_FILE_NAME: Final = "settings.yaml"
CONFIG_PATH_ENV: Final = "KUBEPICK_CONFIG"

# ============================================================================
# Scope keys
# ============================================================================

SCOPE_CURRENT: Final = "current"
SCOPE_ALL: Final = "all"

# ============================================================================
# Log stream display
# ============================================================================

LOG_STREAM_HEADER: Final = "=== Streaming logs from {target} ==="
LOG_URI_PREFIX: Final = "kubectl-logs://"

# ============================================================================
# Status placeholders
# ============================================================================

STATUS_UNKNOWN: Final = "Unknown"
AGE_UNKNOWN: Final = "?"

__all__ = [
    "AGE_UNKNOWN",
    "APP_TITLE",
    "CONFIG_DIR_NAME",
    "CONFIG_FILE_NAME",
    "CONFIG_PATH_ENV",
    "LOG_STREAM_HEADER",
    "LOG_URI_PREFIX",
    "SCOPE_ALL",
    "SCOPE_CURRENT",
    "STATUS_UNKNOWN",
]
