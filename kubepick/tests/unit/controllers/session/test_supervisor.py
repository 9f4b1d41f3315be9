"""Tests for SessionSupervisor - session and timer registry."""

from __future__ import annotations

import asyncio

import pytest

from kubepick.constants.enums import SessionStatus
from kubepick.controllers.session.refresh_timer import RecurringTimer
from kubepick.controllers.session.stream_session import LogTarget, StreamSession
from kubepick.controllers.session.supervisor import SessionSupervisor


async def _noop() -> None:
    return None


@pytest.fixture
def supervisor() -> SessionSupervisor:
    return SessionSupervisor()


def make_session(process) -> StreamSession:
    return StreamSession(LogTarget(pod=f"pod-{process.pid}"), process)


class TestSessionRegistry:
    """Tests for register, unregister and stop."""

    @pytest.mark.asyncio
    async def test_register_and_get(self, supervisor: SessionSupervisor, make_process) -> None:
        session = make_session(make_process(pid=11))

        supervisor.register(session)

        assert supervisor.get(11) is session
        assert list(supervisor.sessions) == [11]

    @pytest.mark.asyncio
    async def test_duplicate_registration_rejected(
        self, supervisor: SessionSupervisor, make_process
    ) -> None:
        session = make_session(make_process(pid=11))
        supervisor.register(session)

        with pytest.raises(ValueError, match="already registered"):
            supervisor.register(session)

    @pytest.mark.asyncio
    async def test_unregister_is_idempotent(
        self, supervisor: SessionSupervisor, make_process
    ) -> None:
        supervisor.register(make_session(make_process(pid=11)))

        assert supervisor.unregister(11) is True
        assert supervisor.unregister(11) is False
        assert supervisor.get(11) is None

    @pytest.mark.asyncio
    async def test_session_unregisters_when_process_exits(
        self, supervisor: SessionSupervisor, make_process
    ) -> None:
        process = make_process(pid=11)
        session = make_session(process)
        supervisor.register(session)
        session.start()

        process.finish(1)
        await session.wait_closed(timeout=1)

        assert session.status == SessionStatus.FAILED
        assert supervisor.sessions == {}

    @pytest.mark.asyncio
    async def test_stop_signals_and_removes(
        self, supervisor: SessionSupervisor, make_process
    ) -> None:
        process = make_process(pid=11)
        session = make_session(process)
        supervisor.register(session)
        session.start()

        assert supervisor.stop(11) is True
        await session.wait_closed(timeout=1)

        assert process.terminate_calls == 1
        assert session.status == SessionStatus.STOPPED
        assert supervisor.stop(11) is False

    def test_sessions_property_is_a_copy(self, supervisor: SessionSupervisor) -> None:
        supervisor.sessions[99] = None

        assert supervisor.sessions == {}


class TestTimerRegistry:
    """Tests for timers."""

    def test_timer_ids_increase(self, supervisor: SessionSupervisor) -> None:
        first = supervisor.register_timer(RecurringTimer(30, _noop))
        second = supervisor.register_timer(RecurringTimer(30, _noop))

        assert (first, second) == (1, 2)
        assert supervisor.timers[first].id == first

    @pytest.mark.asyncio
    async def test_cancel_timer(self, supervisor: SessionSupervisor) -> None:
        timer = RecurringTimer(30, _noop)
        timer_id = supervisor.register_timer(timer)
        timer.start()

        assert supervisor.cancel_timer(timer_id) is True
        assert not timer.active
        assert supervisor.cancel_timer(timer_id) is False


class TestStopAll:
    """Tests for stop_all."""

    @pytest.mark.asyncio
    async def test_stop_all_stops_everything_once(
        self, supervisor: SessionSupervisor, make_process
    ) -> None:
        processes = [make_process(pid=pid) for pid in (11, 12)]
        sessions = [make_session(process) for process in processes]
        for session in sessions:
            supervisor.register(session)
            session.start()
        timer = RecurringTimer(30, _noop)
        supervisor.register_timer(timer)
        timer.start()

        stopped = supervisor.stop_all()
        await asyncio.gather(*(session.wait_closed(timeout=1) for session in stopped))

        assert stopped == sessions
        assert [process.terminate_calls for process in processes] == [1, 1]
        assert all(session.status == SessionStatus.STOPPED for session in sessions)
        assert not timer.active
        assert supervisor.sessions == {}
        assert supervisor.timers == {}

    def test_stop_all_on_empty_registry(self, supervisor: SessionSupervisor) -> None:
        assert supervisor.stop_all() == []
