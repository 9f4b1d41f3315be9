"""Result value returned by cluster client calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from kubepick.exceptions import ClusterError

T = TypeVar("T")


@dataclass
class ClientResult(Generic[T]):
    """Either data or a classified ``ClusterError``, plus call duration."""

    data: T | None = None
    error: ClusterError | None = None
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: ClusterError, duration_ms: float = 0.0) -> ClientResult[T]:
        return cls(data=None, error=error, duration_ms=duration_ms)
