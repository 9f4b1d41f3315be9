"""Log viewer screen package."""

from kubepick.screens.logs.log_screen import LogScreen

__all__ = ["LogScreen"]
