"""Log viewer screen rendering one stream session's buffer."""

from __future__ import annotations

import logging

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, Log

from kubepick.constants.enums import SessionStatus, StreamEventKind
from kubepick.controllers.session.stream_session import StreamSession
from kubepick.keyboard import LOG_SCREEN_BINDINGS

logger = logging.getLogger(__name__)


class LogScreen(Screen[None]):
    """Shows a live log buffer; closing the screen stops the stream."""

    BINDINGS: list[Binding] = LOG_SCREEN_BINDINGS

    def __init__(self, session: StreamSession) -> None:
        super().__init__()
        self.session = session
        self._rendered_total = 0

    def compose(self) -> ComposeResult:
        yield Header()
        yield Log(
            id="log-view",
            max_lines=self.session.buffer.max_lines,
            auto_scroll=False,
        )
        yield Footer()

    def on_mount(self) -> None:
        self.title = self.session.target.uri
        self._update_subtitle()
        self._sync_from_buffer()
        log = self.query_one("#log-view", Log)
        self.watch(log, "scroll_y", self._record_viewport, init=False)
        self.run_worker(self._follow(), exclusive=True, group="log-stream")

    async def _follow(self) -> None:
        async for event in self.session.events():
            if event.kind == StreamEventKind.EXIT:
                self._on_exit(event.exit_code)
            else:
                self._sync_from_buffer()
                self._update_subtitle()
        self._update_subtitle()

    def _sync_from_buffer(self) -> None:
        """Write lines appended since the last sync and follow the tail if needed."""
        buffer = self.session.buffer
        log = self.query_one("#log-view", Log)

        pending = buffer.appended_total - self._rendered_total
        if pending > 0:
            log.write_lines(buffer.tail(pending))
            self._rendered_total = buffer.appended_total

        if buffer.viewport_at_tail:
            log.scroll_end(animate=False)

    def _record_viewport(self) -> None:
        """Store the last visible line so the next append knows whether to follow."""
        buffer = self.session.buffer
        log = self.query_one("#log-view", Log)
        if log.scroll_y >= log.max_scroll_y:
            buffer.move_view(buffer.last_line)
        else:
            buffer.move_view(int(log.scroll_y) + max(log.size.height - 1, 0))

    def _on_exit(self, exit_code: int | None) -> None:
        if exit_code:
            self.notify(f"Log stream exited with code {exit_code}", severity="warning")
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        status = self.session.status
        if status == SessionStatus.FAILED:
            self.sub_title = f"failed ({self.session.exit_code})"
        else:
            self.sub_title = status.value
        evicted = self.session.buffer.evicted
        if evicted:
            self.sub_title = f"{self.sub_title}, {evicted} older lines dropped"

    # =========================================================================
    # Actions
    # =========================================================================

    def action_follow(self) -> None:
        buffer = self.session.buffer
        buffer.move_view(buffer.last_line)
        self.query_one("#log-view", Log).scroll_end(animate=False)

    def action_stop_stream(self) -> None:
        was_running = self.session.is_running
        self.session.stop()
        if was_running:
            self.notify("Log stream stopped")
        self._update_subtitle()

    def action_close(self) -> None:
        self.session.stop()
        self.app.pop_screen()


__all__ = ["LogScreen"]
