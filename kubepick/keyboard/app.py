"""Bindings installed on KubepickApp itself.

Screens add their own keys on top; ``q`` quits when no screen claims it.
"""

from textual.binding import Binding

APP_BINDINGS: list[Binding] = [
    Binding("q", "quit", "Quit"),
]

__all__ = ["APP_BINDINGS"]
