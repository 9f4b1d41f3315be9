"""Injectable clock for testable time handling.

Example usage:
    # Production code
    cache = ResourceCache(clock=SystemClock())

    # Test code
    clock = FrozenClock(1000.0)
    cache = ResourceCache(clock=clock)
    clock.advance(31.0)
"""

from __future__ import annotations

import time as _time
from typing import Protocol


class Clock(Protocol):
    """Protocol for injectable time sources."""

    def monotonic(self) -> float:
        """Return monotonic clock value for measuring durations."""
        ...


class SystemClock:
    """Default clock implementation delegating to the time module."""

    def monotonic(self) -> float:
        return _time.monotonic()


class FrozenClock:
    """Clock frozen at a specific value for testing.

    Example:
        clock = FrozenClock(1000.0)
        clock.advance(60.0)
        assert clock.monotonic() == 1060.0
    """

    def __init__(self, start: float = 0.0) -> None:
        self._value = start

    def monotonic(self) -> float:
        return self._value

    def advance(self, seconds: float) -> None:
        """Advance the clock by ``seconds``."""
        self._value += seconds


__all__ = ["Clock", "FrozenClock", "SystemClock"]
