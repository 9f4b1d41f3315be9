"""Modal dialogs used by the pods screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label, OptionList

from kubepick.keyboard import DIALOG_BINDINGS


class NamespaceDialog(ModalScreen[str | None]):
    """Pick one namespace from a list."""

    DEFAULT_CSS = """
    NamespaceDialog {
        align: center middle;
    }

    #namespace-dialog {
        width: 60;
        max-height: 80%;
        border: round $accent;
        background: $surface;
        padding: 0 1;
    }
    """

    BINDINGS: list[Binding] = DIALOG_BINDINGS

    def __init__(self, namespaces: list[str]) -> None:
        super().__init__()
        self._namespaces = namespaces

    def compose(self) -> ComposeResult:
        with Vertical(id="namespace-dialog"):
            yield Label("Select namespace")
            yield OptionList(*self._namespaces, id="namespace-options")

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        self.dismiss(self._namespaces[event.option_index])

    def action_cancel(self) -> None:
        self.dismiss(None)


class ImageTagDialog(ModalScreen[str | None]):
    """Prompt for a new image tag."""

    DEFAULT_CSS = """
    ImageTagDialog {
        align: center middle;
    }

    #image-tag-dialog {
        width: 70;
        height: auto;
        border: round $accent;
        background: $surface;
        padding: 0 1;
    }
    """

    BINDINGS: list[Binding] = DIALOG_BINDINGS

    def __init__(self, container_name: str, image: str) -> None:
        super().__init__()
        self._container_name = container_name
        self._image = image

    def compose(self) -> ComposeResult:
        with Vertical(id="image-tag-dialog"):
            yield Label(f"New version for {self._container_name}")
            yield Label(self._image, classes="dim")
            yield Input(placeholder="tag", id="image-tag-input")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        self.dismiss(value or None)

    def action_cancel(self) -> None:
        self.dismiss(None)


__all__ = ["ImageTagDialog", "NamespaceDialog"]
