"""Limit and threshold constants for kubepick.

All limit values and validation ranges.
"""

from typing import Final

# ============================================================================
# Validation limits
# ============================================================================

CACHE_TTL_MIN: Final = 1
AUTO_REFRESH_INTERVAL_MIN: Final = 5
LOG_BUFFER_MAX_LINES_MIN: Final = 1
LOG_TAIL_LINES_MIN: Final = 0

__all__ = [
    "AUTO_REFRESH_INTERVAL_MIN",
    "CACHE_TTL_MIN",
    "LOG_BUFFER_MAX_LINES_MIN",
    "LOG_TAIL_LINES_MIN",
]
