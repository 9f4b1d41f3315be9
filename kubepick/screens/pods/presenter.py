"""Pods screen presenter - row formatting and result messages."""

from __future__ import annotations

import logging

from rich.markup import escape

from kubepick.constants.enums import NamespaceMode
from kubepick.controllers.picker.controller import PickerController
from kubepick.controllers.session.stream_session import LogTarget
from kubepick.models.cache.resource_cache import FetchResult
from kubepick.models.core.pod_info import PodContainerInfo

logger = logging.getLogger(__name__)

POD_COLUMNS: tuple[str, ...] = ("Pod", "Container", "Image", "Status", "Restarts", "Age")
NAMESPACE_COLUMN = "Namespace"


class PodsPresenter:
    """Presenter for PodsScreen - keeps widget code free of core details."""

    def __init__(self, controller: PickerController) -> None:
        self._controller = controller
        self.rows: list[PodContainerInfo] = []

    @property
    def shows_namespace(self) -> bool:
        return self._controller.namespace.mode != NamespaceMode.CURRENT

    def columns(self) -> tuple[str, ...]:
        if self.shows_namespace:
            return (NAMESPACE_COLUMN, *POD_COLUMNS)
        return POD_COLUMNS

    def format_row(self, row: PodContainerInfo) -> tuple[str, ...]:
        cells = (
            row.pod_name,
            row.container_name,
            row.image,
            row.status,
            str(row.restarts),
            row.age,
        )
        if self.shows_namespace:
            return (row.namespace or "", *cells)
        return cells

    def title(self) -> str:
        return f"Kubernetes Pods ({self._controller.namespace.describe()})"

    def apply(self, result: FetchResult) -> list[tuple[str, ...]] | None:
        """Store rows from ``result``; returns table rows, or None to keep the table."""
        if result.data is None:
            return None
        self.rows = list(result.data)
        return [self.format_row(row) for row in self.rows]

    @staticmethod
    def result_message(result: FetchResult) -> tuple[str, str] | None:
        """Notification ``(message, severity)`` for a fetch result, if any."""
        if result.error is None:
            return None
        message = escape(result.error.message)
        if result.stale:
            return (f"{message} (showing cached data)", "warning")
        return (message, "error")

    def row_at(self, index: int) -> PodContainerInfo | None:
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def log_target(self, row: PodContainerInfo) -> LogTarget:
        return LogTarget(
            pod=row.pod_name,
            container=row.container_name,
            namespace=self._controller.namespace.command_namespace(row.namespace),
        )

    def command_namespace(self, row: PodContainerInfo) -> str | None:
        return self._controller.namespace.command_namespace(row.namespace)


__all__ = ["NAMESPACE_COLUMN", "POD_COLUMNS", "PodsPresenter"]
