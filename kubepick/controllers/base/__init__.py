"""Base classes for controllers."""

from kubepick.controllers.base.base_controller import BaseController

__all__ = ["BaseController"]
