"""Shared test fixtures for kubepick tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from kubepick.controllers.session.stream_session import LogTarget
from kubepick.exceptions import ClusterError
from kubepick.models.core.client_result import ClientResult
from kubepick.models.state.config_manager import ConfigManager
from kubepick.utils.clock import FrozenClock


class FakeProcess:
    """Stand-in for ``asyncio.subprocess.Process`` with manually fed pipes."""

    def __init__(self, pid: int = 4242, with_pipes: bool = True) -> None:
        self.pid = pid
        self.stdout = asyncio.StreamReader() if with_pipes else None
        self.stderr = asyncio.StreamReader() if with_pipes else None
        self.returncode: int | None = None
        self.terminate_calls = 0
        self._exited = asyncio.get_running_loop().create_future()

    def emit(self, text: str, stream: str = "stdout") -> None:
        reader = self.stdout if stream == "stdout" else self.stderr
        assert reader is not None
        reader.feed_data(text.encode())

    def finish(self, code: int) -> None:
        if self.returncode is not None:
            return
        self.returncode = code
        for reader in (self.stdout, self.stderr):
            if reader is not None:
                reader.feed_eof()
        self._exited.set_result(code)

    def terminate(self) -> None:
        self.terminate_calls += 1
        if self.returncode is not None:
            raise ProcessLookupError
        self.finish(-15)

    async def wait(self) -> int:
        return await self._exited


class FakeClusterClient:
    """In-memory cluster client recording every call."""

    def __init__(self) -> None:
        self.pods: dict[str, list[dict[str, Any]]] = {}
        self.namespaces: list[dict[str, Any]] = []
        self.current_namespace = "default"
        self.pod_calls: list[str] = []
        self.namespace_calls = 0
        self.restart_calls: list[tuple[str, str | None]] = []
        self.set_image_calls: list[tuple[str, str, str, str | None]] = []
        self.terminal_calls: list[tuple[LogTarget, str, int]] = []
        self.spawned: list[tuple[LogTarget, int]] = []
        self.next_error: ClusterError | None = None
        self.connection_error: ClusterError | None = None
        self.connection_checks = 0
        self.process_factory: Callable[[], FakeProcess] = FakeProcess

    def _take_error(self) -> ClusterError | None:
        error, self.next_error = self.next_error, None
        return error

    async def check_connection(self) -> ClientResult[bool]:
        self.connection_checks += 1
        if self.connection_error is not None:
            return ClientResult(data=False, error=self.connection_error)
        return ClientResult(data=True)

    async def list_pods(self, scope_key: str) -> ClientResult[list[dict[str, Any]]]:
        self.pod_calls.append(scope_key)
        error = self._take_error()
        if error is not None:
            return ClientResult.failure(error)
        return ClientResult(data=list(self.pods.get(scope_key, [])))

    async def list_namespaces(self) -> ClientResult[list[dict[str, Any]]]:
        self.namespace_calls += 1
        error = self._take_error()
        if error is not None:
            return ClientResult.failure(error)
        return ClientResult(data=list(self.namespaces))

    async def get_current_namespace(self) -> ClientResult[str]:
        return ClientResult(data=self.current_namespace)

    async def restart_workload(self, name: str, namespace: str | None = None) -> ClientResult[bool]:
        self.restart_calls.append((name, namespace))
        error = self._take_error()
        if error is not None:
            return ClientResult(data=False, error=error)
        return ClientResult(data=True)

    async def set_image(
        self, workload: str, container: str, image: str, namespace: str | None = None
    ) -> ClientResult[bool]:
        self.set_image_calls.append((workload, container, image, namespace))
        error = self._take_error()
        if error is not None:
            return ClientResult(data=False, error=error)
        return ClientResult(data=True)

    def log_command(self, target: LogTarget, tail_lines: int = 100) -> list[str]:
        return ["kubectl", "logs", "-f", f"--tail={tail_lines}", target.pod]

    async def spawn_log_stream(self, target: LogTarget, tail_lines: int = 100) -> FakeProcess:
        self.spawned.append((target, tail_lines))
        return self.process_factory()

    async def open_in_terminal(
        self, target: LogTarget, split_cmd: str, tail_lines: int = 100
    ) -> ClientResult[bool]:
        self.terminal_calls.append((target, split_cmd, tail_lines))
        return ClientResult(data=True)


def pod_item(
    name: str,
    namespace: str = "default",
    containers: tuple[str, ...] = ("app",),
    phase: str = "Running",
) -> dict[str, Any]:
    """Build a minimal ``kubectl get pods -o json`` item."""
    return {
        "metadata": {"name": name, "namespace": namespace},
        "spec": {
            "containers": [
                {"name": container, "image": f"registry.local/{container}:v1"}
                for container in containers
            ]
        },
        "status": {"phase": phase},
    }


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(1000.0)


@pytest.fixture
def fake_client() -> FakeClusterClient:
    return FakeClusterClient()


@pytest.fixture
def make_process() -> Callable[..., FakeProcess]:
    """Factory for FakeProcess; call it from inside a running event loop."""
    return FakeProcess


@pytest.fixture
def make_pod() -> Callable[..., dict[str, Any]]:
    return pod_item


@pytest.fixture
def config_manager(tmp_path) -> ConfigManager:
    return ConfigManager(path=tmp_path / "settings.yaml")


async def drain(iterations: int = 5) -> None:
    """Let pending reader/watch tasks run."""
    for _ in range(iterations):
        await asyncio.sleep(0)


@pytest.fixture
def settle() -> Callable[..., Any]:
    return drain
