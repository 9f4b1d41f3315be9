"""Application-specific exceptions for kubepick.

Exception Hierarchy:
    KubepickError (base)
    ├── ClusterError
    │   ├── ConnectivityError
    │   ├── AuthError
    │   ├── NotFoundError
    │   ├── ClusterTimeoutError
    │   ├── ParseError
    │   └── CommandError
    ├── SpawnFailedError
    ├── InvalidModeError
    ├── CacheKeyError
    └── ConfigError
        ├── ConfigLoadError
        └── ConfigSaveError

Cluster errors are classified once by the kubectl client and travel as
values inside ``ClientResult``/``FetchResult``. The remaining errors are
raised.
"""

from __future__ import annotations


class KubepickError(Exception):
    """Base exception for all kubepick errors."""


class ClusterError(KubepickError):
    """Base class for classified kubectl failures.

    Attributes:
        message: Human-readable error description shown to the user.
        detail: Raw stderr (or exception text) the message was derived from.
    """

    def __init__(self, message: str, detail: str = "") -> None:
        self.message = message
        self.detail = detail
        super().__init__(message)


class ConnectivityError(ClusterError):
    """Raised when the cluster (or kubectl itself) cannot be reached."""


class AuthError(ClusterError):
    """Raised when the request is forbidden."""


class NotFoundError(ClusterError):
    """Raised when the requested resource does not exist."""


class ClusterTimeoutError(ClusterError):
    """Raised when a kubectl call times out."""


class ParseError(ClusterError):
    """Raised when kubectl output cannot be decoded."""


class CommandError(ClusterError):
    """Raised when kubectl rejects a command for any other reason."""


class SpawnFailedError(KubepickError):
    """Raised when a log stream subprocess could not be started."""

    def __init__(self, command: list[str], cause: Exception | None = None) -> None:
        self.command = command
        self.cause = cause
        message = f"Failed to start log stream: {' '.join(command)}"
        if cause:
            message = f"{message}: {cause}"
        super().__init__(message)


class InvalidModeError(KubepickError):
    """Raised when the namespace state machine receives a bad mode."""

    def __init__(self, mode: object, message: str | None = None) -> None:
        self.mode = mode
        super().__init__(message or f"Invalid namespace mode: {mode!r}")


class CacheKeyError(KubepickError, KeyError):
    """Raised for a cache key outside the fixed key set."""

    def __init__(self, key: object) -> None:
        self.key = key
        super().__init__(f"Invalid cache key: {key!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class ConfigError(KubepickError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""
