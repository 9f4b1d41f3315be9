"""Log session supervision: stream sessions, timers and their registry."""

from kubepick.controllers.session.refresh_timer import RecurringTimer
from kubepick.controllers.session.stream_session import (
    LogBuffer,
    LogTarget,
    StreamEvent,
    StreamSession,
)
from kubepick.controllers.session.supervisor import SessionSupervisor

__all__ = [
    "LogBuffer",
    "LogTarget",
    "RecurringTimer",
    "SessionSupervisor",
    "StreamEvent",
    "StreamSession",
]
