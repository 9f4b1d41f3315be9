"""Picker controller package."""

from kubepick.controllers.picker.controller import PickerController, replace_image_tag

__all__ = ["PickerController", "replace_image_tag"]
