"""Recurring asyncio timer used for auto-refresh."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class RecurringTimer:
    """Invoke an async callback every ``interval`` seconds until cancelled.

    A failing callback is logged and the timer keeps running.
    """

    def __init__(
        self,
        interval: float,
        callback: Callable[[], Awaitable[object]],
        name: str = "refresh",
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self.name = name
        self.id: int | None = None
        self._callback = callback
        self._task: asyncio.Task[None] | None = None
        self.fire_count = 0

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.active:
            return
        self._task = asyncio.create_task(self._run(), name=f"timer-{self.name}")

    def cancel(self) -> None:
        """Cancel the timer. Idempotent."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug("Timer %s cancelled", self.name)
        self._task = None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.fire_count += 1
            try:
                await self._callback()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Timer %s callback failed", self.name)


__all__ = ["RecurringTimer"]
