"""Pod picker screen package."""

from kubepick.screens.pods.pods_screen import PodsScreen
from kubepick.screens.pods.presenter import PodsPresenter

__all__ = ["PodsPresenter", "PodsScreen"]
