"""kubepick screens.

This package contains all screen modules for the TUI application.

Domain Structure:
    - pods/ - Pod picker table, its presenter and dialogs
    - logs/ - Live log viewer for a stream session

Note: Keybindings live in the keyboard/ package:
    - kubepick.keyboard.*_SCREEN_BINDINGS - Keybinding constants

Example Usage:
    from kubepick.screens.pods import PodsScreen
    from kubepick.screens.logs import LogScreen
"""

from __future__ import annotations

from kubepick.screens.logs import LogScreen
from kubepick.screens.pods import PodsPresenter, PodsScreen

__all__ = [
    "LogScreen",
    "PodsPresenter",
    "PodsScreen",
]
