"""Pod picker screen."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rich.markup import escape
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header

from kubepick.constants.enums import LogOutputMode
from kubepick.exceptions import SpawnFailedError
from kubepick.keyboard import PODS_SCREEN_BINDINGS
from kubepick.models.cache.resource_cache import FetchResult
from kubepick.models.core.client_result import ClientResult
from kubepick.models.core.pod_info import PodContainerInfo
from kubepick.screens.logs.log_screen import LogScreen
from kubepick.screens.pods.dialogs import ImageTagDialog, NamespaceDialog
from kubepick.screens.pods.presenter import PodsPresenter

if TYPE_CHECKING:
    from kubepick.controllers.picker.controller import PickerController

logger = logging.getLogger(__name__)


class PodsScreen(Screen[None]):
    """Table of pod containers with log, restart and image actions."""

    BINDINGS: list[Binding] = PODS_SCREEN_BINDINGS

    def __init__(self, controller: PickerController) -> None:
        super().__init__()
        self.controller = controller
        self.presenter = PodsPresenter(controller)

    def compose(self) -> ComposeResult:
        yield Header()
        yield DataTable(id="pods-table", cursor_type="row", zebra_stripes=True)
        yield Footer()

    def on_mount(self) -> None:
        self.run_worker(self._initial_load(), exclusive=True, group="pods-load")
        self.controller.start_auto_refresh(self._render_result)

    async def _initial_load(self) -> None:
        check = await self.controller.check_connection()
        if check.error is not None:
            self.notify(
                escape(check.error.message),
                severity="error",
                timeout=self.controller.settings.notify_timeout,
            )
            return
        await self.controller.resolve_current_namespace()
        await self._load(force_refresh=False)

    # =========================================================================
    # Rendering
    # =========================================================================

    async def _load(self, force_refresh: bool) -> None:
        result = await self.controller.list_pods(force_refresh=force_refresh)
        self._render_result(result)

    def _render_result(self, result: FetchResult) -> None:
        self.title = self.presenter.title()
        message = self.presenter.result_message(result)
        if message is not None:
            text, severity = message
            self.notify(text, severity=severity, timeout=self.controller.settings.notify_timeout)

        rows = self.presenter.apply(result)
        if rows is None:
            return
        table = self.query_one("#pods-table", DataTable)
        cursor_row = table.cursor_row
        table.clear(columns=True)
        table.add_columns(*self.presenter.columns())
        for row, cells in zip(self.presenter.rows, rows):
            table.add_row(*cells, key=row.key)
        if rows:
            table.move_cursor(row=min(cursor_row, len(rows) - 1))

    def _selected_row(self) -> PodContainerInfo | None:
        table = self.query_one("#pods-table", DataTable)
        row = self.presenter.row_at(table.cursor_row)
        if row is None:
            self.notify("No pod selected", severity="warning")
        return row

    def _notify_result(self, result: ClientResult[bool], success: str) -> None:
        if result.error is not None:
            self.notify(escape(result.error.message), severity="error")
        else:
            self.notify(success)

    # =========================================================================
    # Actions
    # =========================================================================

    def action_refresh(self) -> None:
        self.run_worker(self._load(force_refresh=False), exclusive=True, group="pods-load")

    def action_force_refresh(self) -> None:
        self.run_worker(self._load(force_refresh=True), exclusive=True, group="pods-load")

    def action_toggle_scope(self) -> None:
        self.controller.toggle_scope()
        self.action_refresh()

    def action_select_namespace(self) -> None:
        self.run_worker(self._choose_namespace(), exclusive=True, group="namespaces")

    async def _choose_namespace(self) -> None:
        result = await self.controller.list_namespaces()
        if result.error is not None and not result.data:
            self.notify(escape(result.error.message), severity="error")
            return
        names = [namespace.name for namespace in result.data or []]

        def _on_selected(name: str | None) -> None:
            if name:
                self.controller.select_namespace(name)
                self.action_refresh()

        self.app.push_screen(NamespaceDialog(names), _on_selected)

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        self.action_open_logs()

    def action_open_logs(self) -> None:
        row = self._selected_row()
        if row is not None:
            self.run_worker(self._open_logs(row), group="logs")

    async def _open_logs(self, row: PodContainerInfo) -> None:
        target = self.presenter.log_target(row)
        if self.controller.settings.log_output == LogOutputMode.EXTERNAL_TERMINAL:
            result = await self.controller.open_logs_in_terminal(target)
            if result.error is not None:
                self.notify(escape(result.error.message), severity="error")
            return
        try:
            session = await self.controller.open_log_session(target)
        except SpawnFailedError as exc:
            self.notify(escape(str(exc)), severity="error")
            return
        self.app.push_screen(LogScreen(session))

    def action_restart(self) -> None:
        row = self._selected_row()
        if row is not None:
            self.run_worker(self._restart(row), group="actions")

    async def _restart(self, row: PodContainerInfo) -> None:
        result = await self.controller.restart(row.workload, self.presenter.command_namespace(row))
        self._notify_result(result, f"Deployment {row.workload} restarted.")
        if result.ok:
            await self._load(force_refresh=False)

    def action_update_image(self) -> None:
        row = self._selected_row()
        if row is None:
            return

        def _on_tag(tag: str | None) -> None:
            if tag:
                self.run_worker(self._update_image(row, tag), group="actions")

        self.app.push_screen(ImageTagDialog(row.container_name, row.image), _on_tag)

    async def _update_image(self, row: PodContainerInfo, tag: str) -> None:
        try:
            result = await self.controller.update_image(
                row.workload,
                row.container_name,
                tag,
                row.image,
                self.presenter.command_namespace(row),
            )
        except ValueError as exc:
            self.notify(escape(str(exc)), severity="error")
            return
        self._notify_result(result, f"Deployment {row.workload} image updated.")
        if result.ok:
            await self._load(force_refresh=False)


__all__ = ["PodsScreen"]
