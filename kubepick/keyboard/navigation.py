"""Screen-specific keyboard bindings."""

from textual.binding import Binding

# ============================================================================
# Pod picker
# ============================================================================

PODS_SCREEN_BINDINGS: list[Binding] = [
    Binding("l", "open_logs", "Logs"),
    Binding("ctrl+r", "restart", "Restart"),
    Binding("i", "update_image", "Image"),
    Binding("r", "refresh", "Refresh"),
    Binding("R", "force_refresh", "Force refresh"),
    Binding("t", "toggle_scope", "All/Current"),
    Binding("n", "select_namespace", "Namespace"),
]

# ============================================================================
# Log viewer
# ============================================================================

LOG_SCREEN_BINDINGS: list[Binding] = [
    Binding("q", "close", "Close", priority=True),
    Binding("ctrl+c", "stop_stream", "Stop stream", priority=True),
    Binding("G", "follow", "Follow"),
]

# ============================================================================
# Dialogs
# ============================================================================

DIALOG_BINDINGS: list[Binding] = [
    Binding("escape", "cancel", "Cancel"),
]

__all__ = [
    "DIALOG_BINDINGS",
    "LOG_SCREEN_BINDINGS",
    "PODS_SCREEN_BINDINGS",
]
