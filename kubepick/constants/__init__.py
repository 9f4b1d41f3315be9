"""Shared constants for kubepick.

Enums live in enums.py, scalar values in values.py, kubectl timeouts in
timeouts.py, validation bounds in limits.py and settings defaults in
defaults.py. Key bindings are kept in kubepick.keyboard.
"""

from kubepick.constants.defaults import (
    AUTO_REFRESH_INTERVAL_DEFAULT,
    CACHE_TTL_DEFAULT,
    LOG_BUFFER_MAX_LINES_DEFAULT,
    LOG_TAIL_LINES_DEFAULT,
)
from kubepick.constants.enums import (
    CacheKey,
    LogOutputMode,
    NamespaceMode,
    SessionStatus,
    StreamEventKind,
)
from kubepick.constants.timeouts import (
    CLUSTER_REQUEST_TIMEOUT,
    KUBECTL_COMMAND_TIMEOUT,
)
from kubepick.constants.values import (
    APP_TITLE,
    SCOPE_ALL,
    SCOPE_CURRENT,
)

__all__ = [
    "APP_TITLE",
    "AUTO_REFRESH_INTERVAL_DEFAULT",
    "CACHE_TTL_DEFAULT",
    "CLUSTER_REQUEST_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
    "LOG_BUFFER_MAX_LINES_DEFAULT",
    "LOG_TAIL_LINES_DEFAULT",
    "SCOPE_ALL",
    "SCOPE_CURRENT",
    "CacheKey",
    "LogOutputMode",
    "NamespaceMode",
    "SessionStatus",
    "StreamEventKind",
]
