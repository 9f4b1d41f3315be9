"""Main application class for kubepick."""

from __future__ import annotations

import logging

from textual.app import App
from textual.binding import Binding
from textual.logging import TextualHandler

from kubepick.constants import APP_TITLE
from kubepick.controllers.cluster.client import KubectlClient
from kubepick.controllers.picker.controller import PickerController
from kubepick.exceptions import ConfigLoadError
from kubepick.keyboard.app import APP_BINDINGS
from kubepick.models.state.config_manager import ConfigManager
from kubepick.screens.pods import PodsScreen

logger = logging.getLogger(__name__)


class KubepickApp(App[None]):
    """Pod picker application."""

    TITLE = APP_TITLE
    BINDINGS: list[Binding] = APP_BINDINGS

    def __init__(
        self,
        controller: PickerController | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.controller = controller or PickerController(
            KubectlClient(), self._load_config()
        )

    @staticmethod
    def _load_config() -> ConfigManager:
        """Load settings from persistent storage, falling back to defaults."""
        config = ConfigManager()
        try:
            config.load()
        except ConfigLoadError as exc:
            logger.warning("%s; using default settings", exc)
        return config

    def on_mount(self) -> None:
        self.push_screen(PodsScreen(self.controller))

    async def action_quit(self) -> None:
        await self.controller.shutdown()
        self.exit()

    async def on_unmount(self) -> None:
        # Covers exits that bypass action_quit; a second shutdown is a no-op.
        await self.controller.shutdown()


def main() -> None:
    """Console entry point."""
    app = KubepickApp()
    logging.basicConfig(level=app.controller.settings.log_level, handlers=[TextualHandler()])
    app.run()


__all__ = ["KubepickApp", "main"]
