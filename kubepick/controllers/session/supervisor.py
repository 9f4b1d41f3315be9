"""Registry of live log sessions and recurring timers.

Every registered resource is stopped exactly once: sessions unregister
themselves when they stop or their process exits, ``unregister`` is
idempotent, and ``stop_all`` signals every remaining session and cancels
every timer before clearing the registry.
"""

from __future__ import annotations

import itertools
import logging

from kubepick.controllers.session.refresh_timer import RecurringTimer
from kubepick.controllers.session.stream_session import StreamSession

logger = logging.getLogger(__name__)


class SessionSupervisor:
    """Tracks background log streams and timers for one picker context."""

    def __init__(self) -> None:
        self._sessions: dict[int, StreamSession] = {}
        self._timers: dict[int, RecurringTimer] = {}
        self._timer_ids = itertools.count(1)

    @property
    def sessions(self) -> dict[int, StreamSession]:
        return dict(self._sessions)

    @property
    def timers(self) -> dict[int, RecurringTimer]:
        return dict(self._timers)

    def get(self, session_id: int) -> StreamSession | None:
        return self._sessions.get(session_id)

    # =========================================================================
    # Sessions
    # =========================================================================

    def register(self, session: StreamSession) -> None:
        """Register ``session``; it unregisters itself when it terminates."""
        if session.id in self._sessions:
            raise ValueError(f"Session {session.id} is already registered")
        self._sessions[session.id] = session
        session.add_terminated_callback(lambda s: self.unregister(s.id))
        logger.debug("Registered log session %s (%s)", session.id, session.target.title)

    def unregister(self, session_id: int) -> bool:
        """Remove a session; returns False if it was not registered."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        logger.debug("Unregistered log session %s", session_id)
        return True

    def stop(self, session_id: int) -> bool:
        """Stop and remove a session; returns False if it was not registered."""
        session = self._sessions.pop(session_id, None)
        if session is None:
            return False
        session.stop()
        return True

    # =========================================================================
    # Timers
    # =========================================================================

    def register_timer(self, timer: RecurringTimer) -> int:
        timer_id = next(self._timer_ids)
        timer.id = timer_id
        self._timers[timer_id] = timer
        logger.debug("Registered timer %s (%s)", timer_id, timer.name)
        return timer_id

    def cancel_timer(self, timer_id: int) -> bool:
        timer = self._timers.pop(timer_id, None)
        if timer is None:
            return False
        timer.cancel()
        return True

    # =========================================================================
    # Shutdown
    # =========================================================================

    def stop_all(self) -> list[StreamSession]:
        """Stop every session and cancel every timer; returns the stopped sessions."""
        sessions = list(self._sessions.values())
        timers = list(self._timers.values())
        self._sessions.clear()
        self._timers.clear()

        for session in sessions:
            session.stop()
        for timer in timers:
            timer.cancel()

        if sessions or timers:
            logger.info("Stopped %d log session(s) and %d timer(s)", len(sessions), len(timers))
        return sessions


__all__ = ["SessionSupervisor"]
