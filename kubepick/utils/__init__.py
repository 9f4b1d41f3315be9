"""Utility functions and classes for kubepick."""

from kubepick.utils.clock import Clock, FrozenClock, SystemClock

__all__ = [
    "Clock",
    "FrozenClock",
    "SystemClock",
]
