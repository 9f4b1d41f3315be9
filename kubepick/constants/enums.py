"""All enum definitions for kubepick.

This module consolidates all enumerations used throughout the application.
"""

from enum import Enum

# =============================================================================
# Namespace Enums
# =============================================================================

class NamespaceMode(str, Enum):
    """Namespace scope the pod list is viewed in."""

    CURRENT = "current"
    ALL = "all"
    SPECIFIC = "specific"


# =============================================================================
# Cache Enums
# =============================================================================

class CacheKey(str, Enum):
    """Fixed set of cached resource kinds."""

    PODS = "pods"
    NAMESPACES = "namespaces"


# =============================================================================
# Log Session Enums
# =============================================================================

class LogOutputMode(str, Enum):
    """Where log streams are rendered."""

    STREAM_BUFFER = "stream_buffer"
    EXTERNAL_TERMINAL = "external_terminal"


class SessionStatus(Enum):
    """Lifecycle states of a log stream session."""

    STARTING = "starting"
    RUNNING = "running"
    STOPPED = "stopped"
    FAILED = "failed"


class StreamEventKind(Enum):
    """Kinds of events emitted by a log stream session."""

    CHUNK = "chunk"
    ERROR_CHUNK = "error_chunk"
    EXIT = "exit"


__all__ = [
    "CacheKey",
    "LogOutputMode",
    "NamespaceMode",
    "SessionStatus",
    "StreamEventKind",
]
