"""Log stream sessions.

A ``StreamSession`` owns one ``kubectl logs -f`` subprocess, a bounded
``LogBuffer`` and the follow-mode view position. Output is applied to the
buffer as it arrives and re-published as ``StreamEvent`` objects that
consumers read through ``StreamSession.events()``.

Lifecycle: ``starting -> running -> stopped | failed(code)``. Readers are
started by ``start()``, which callers invoke only after the session has
been registered with the supervisor; output produced before that waits in
the pipe.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
from collections import deque
from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import suppress
from dataclasses import dataclass, field

from kubepick.constants.defaults import LOG_BUFFER_MAX_LINES_DEFAULT
from kubepick.constants.enums import SessionStatus, StreamEventKind
from kubepick.constants.values import LOG_STREAM_HEADER, LOG_URI_PREFIX
from kubepick.exceptions import SpawnFailedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogTarget:
    """What a log session follows."""

    pod: str
    container: str | None = None
    namespace: str | None = None

    @property
    def title(self) -> str:
        return f"{self.pod}/{self.container}" if self.container else self.pod

    @property
    def uri(self) -> str:
        return f"{LOG_URI_PREFIX}{self.title}"


@dataclass(frozen=True)
class StreamEvent:
    """One event from a running session."""

    kind: StreamEventKind
    lines: tuple[str, ...] = field(default_factory=tuple)
    exit_code: int | None = None


class LogBuffer:
    """Bounded line buffer with follow-mode view tracking.

    Oldest lines are evicted from the front once ``max_lines`` is exceeded.
    ``view_line`` is the consumer's 0-based view position.
    """

    def __init__(
        self,
        max_lines: int = LOG_BUFFER_MAX_LINES_DEFAULT,
        follow_mode: bool = True,
    ) -> None:
        if max_lines < 1:
            raise ValueError(f"max_lines must be positive, got {max_lines}")
        self.max_lines = max_lines
        self.follow_mode = follow_mode
        self._lines: deque[str] = deque(maxlen=max_lines)
        self.view_line = 0
        self.viewport_at_tail = False
        self.evicted = 0
        self.appended_total = 0

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def last_line(self) -> int:
        return max(len(self._lines) - 1, 0)

    @staticmethod
    def clean(lines: Iterable[str]) -> list[str]:
        """Strip carriage returns and drop trailing empty lines."""
        cleaned = [line.rstrip("\r") for line in lines]
        while cleaned and cleaned[-1] == "":
            cleaned.pop()
        return cleaned

    def tail(self, count: int) -> list[str]:
        """The last ``count`` retained lines."""
        if count <= 0:
            return []
        return list(self._lines)[-count:]

    def move_view(self, line: int) -> int:
        """Move the view position, clamped to the buffer."""
        self.view_line = min(max(line, 0), self.last_line)
        return self.view_line

    def append(self, lines: Iterable[str]) -> int:
        """Append a chunk of lines as one unit; returns the number appended.

        When follow mode is on and the view is at or past the second-to-last
        line, the view moves to the new last line after append and eviction.
        """
        new_lines = self.clean(lines)
        if not new_lines:
            return 0

        at_tail = self.follow_mode and self.view_line >= len(self._lines) - 2

        overflow = len(self._lines) + len(new_lines) - self.max_lines
        if overflow > 0:
            self.evicted += overflow
        self._lines.extend(new_lines)
        self.appended_total += len(new_lines)

        self.viewport_at_tail = at_tail
        if at_tail:
            self.view_line = self.last_line
        return len(new_lines)


TerminatedCallback = Callable[["StreamSession"], None]


class StreamSession:
    """One running log-follow operation."""

    READ_CHUNK_SIZE = 64 * 1024

    def __init__(
        self,
        target: LogTarget,
        process: asyncio.subprocess.Process,
        *,
        max_lines: int = LOG_BUFFER_MAX_LINES_DEFAULT,
        follow_mode: bool = True,
        command: list[str] | None = None,
        header: bool = True,
    ) -> None:
        self.command = command or []
        if process.pid is None or process.pid <= 0:
            raise SpawnFailedError(self.command)

        self.target = target
        self.process = process
        self.buffer = LogBuffer(max_lines=max_lines, follow_mode=follow_mode)
        self.status = SessionStatus.STARTING
        self.exit_code: int | None = None

        self._subscribers: list[asyncio.Queue[StreamEvent | None]] = []
        self._terminated_callbacks: list[TerminatedCallback] = []
        self._terminated = False
        self._exit_published = False
        self._reader_tasks: list[asyncio.Task[None]] = []
        self._watch_task: asyncio.Task[None] | None = None

        if header:
            self.buffer.append([LOG_STREAM_HEADER.format(target=target.title)])

    @property
    def id(self) -> int:
        return self.process.pid

    @property
    def is_running(self) -> bool:
        return self.status == SessionStatus.RUNNING

    def add_terminated_callback(self, callback: TerminatedCallback) -> None:
        """Call ``callback(session)`` once when the session stops or fails."""
        self._terminated_callbacks.append(callback)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self) -> None:
        """Begin reading output. Must be called from the running event loop."""
        if self.status != SessionStatus.STARTING:
            return
        self.status = SessionStatus.RUNNING
        for stream, kind in (
            (self.process.stdout, StreamEventKind.CHUNK),
            (self.process.stderr, StreamEventKind.ERROR_CHUNK),
        ):
            if stream is not None:
                self._reader_tasks.append(asyncio.create_task(self._read_stream(stream, kind)))
        self._watch_task = asyncio.create_task(self._watch_exit())
        logger.info("Log stream %s started for %s", self.id, self.target.title)

    def stop(self) -> None:
        """Stop the session. Always signals the subprocess, even after exit."""
        with suppress(ProcessLookupError):
            self.process.terminate()

        if self.status in (SessionStatus.STARTING, SessionStatus.RUNNING):
            self.status = SessionStatus.STOPPED
            logger.info("Log stream %s stopped for %s", self.id, self.target.title)
            self._publish_exit(None)
            self._notify_terminated()

    async def wait_closed(self, timeout: float | None = None) -> None:
        """Wait for the subprocess to exit; readers are cancelled on timeout."""
        if self._watch_task is None:
            return
        done, _ = await asyncio.wait({self._watch_task}, timeout=timeout)
        if not done:
            logger.warning("Log stream %s did not exit within %ss", self.id, timeout)
            for task in (*self._reader_tasks, self._watch_task):
                task.cancel()

    # =========================================================================
    # Event stream
    # =========================================================================

    async def events(self) -> AsyncIterator[StreamEvent]:
        """Yield events from now on until the session ends."""
        queue: asyncio.Queue[StreamEvent | None] = asyncio.Queue()
        if self._exit_published:
            return
        self._subscribers.append(queue)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    return
                yield event
        finally:
            with suppress(ValueError):
                self._subscribers.remove(queue)

    def _publish(self, event: StreamEvent) -> None:
        for queue in self._subscribers:
            queue.put_nowait(event)

    def _publish_exit(self, exit_code: int | None) -> None:
        if self._exit_published:
            return
        self._exit_published = True
        self._publish(StreamEvent(StreamEventKind.EXIT, exit_code=exit_code))
        for queue in self._subscribers:
            queue.put_nowait(None)

    # =========================================================================
    # Output handling
    # =========================================================================

    def handle_output(self, kind: StreamEventKind, lines: list[str]) -> None:
        """Apply a chunk to the buffer and publish it.

        Output arriving after the session left ``running`` is discarded.
        """
        if self.status != SessionStatus.RUNNING:
            return
        appended = self.buffer.append(lines)
        if appended:
            self._publish(StreamEvent(kind, tuple(self.buffer.clean(lines))))

    def handle_exit(self, exit_code: int) -> None:
        """Record process exit; a nonzero code marks the session failed."""
        self.exit_code = exit_code
        if self.status != SessionStatus.RUNNING:
            return
        if exit_code == 0:
            self.status = SessionStatus.STOPPED
            logger.info("Log stream %s for %s ended", self.id, self.target.title)
        else:
            self.status = SessionStatus.FAILED
            logger.warning(
                "Log stream %s for %s exited with code %d", self.id, self.target.title, exit_code
            )
        self._publish_exit(exit_code)
        self._notify_terminated()

    def _notify_terminated(self) -> None:
        if self._terminated:
            return
        self._terminated = True
        for callback in self._terminated_callbacks:
            callback(self)

    async def _read_stream(self, stream: asyncio.StreamReader, kind: StreamEventKind) -> None:
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        pending = ""
        while True:
            chunk = await stream.read(self.READ_CHUNK_SIZE)
            if not chunk:
                break
            parts = (pending + decoder.decode(chunk)).split("\n")
            pending = parts.pop()
            if parts:
                self.handle_output(kind, parts)
        pending += decoder.decode(b"", final=True)
        if pending:
            self.handle_output(kind, [pending])

    async def _watch_exit(self) -> None:
        if self._reader_tasks:
            await asyncio.wait(self._reader_tasks)
        exit_code = await self.process.wait()
        self.handle_exit(exit_code)


__all__ = [
    "LogBuffer",
    "LogTarget",
    "StreamEvent",
    "StreamSession",
]
