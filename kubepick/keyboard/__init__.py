"""Keyboard bindings module.

This module provides all keyboard bindings for kubepick.
Bindings are organized into two categories:

- app: App-level bindings (APP_BINDINGS)
- navigation: Screen-specific bindings (*_SCREEN_BINDINGS, DIALOG_BINDINGS)
"""

from kubepick.keyboard.app import APP_BINDINGS
from kubepick.keyboard.navigation import (
    DIALOG_BINDINGS,
    LOG_SCREEN_BINDINGS,
    PODS_SCREEN_BINDINGS,
)

__all__ = [
    "APP_BINDINGS",
    "DIALOG_BINDINGS",
    "LOG_SCREEN_BINDINGS",
    "PODS_SCREEN_BINDINGS",
]
