"""Picker controller - the session/cache core behind the pod picker.

One ``PickerController`` is the explicit context for a picker: it owns the
settings holder, namespace state, resource cache and session supervisor, and
exposes the verbs the presentation layer drives (list, refresh, toggle
scope, select namespace, open/stop logs, restart, update image).
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import Any

from kubepick.constants.enums import CacheKey, NamespaceMode
from kubepick.constants.values import SCOPE_ALL
from kubepick.controllers.cluster.client import KubectlClient
from kubepick.controllers.cluster.parsers.pod_parser import PodParser
from kubepick.controllers.session.refresh_timer import RecurringTimer
from kubepick.controllers.session.stream_session import LogTarget, StreamSession
from kubepick.controllers.session.supervisor import SessionSupervisor
from kubepick.models.cache.resource_cache import FetchResult, ResourceCache
from kubepick.models.core.client_result import ClientResult
from kubepick.models.state.app_settings import Settings
from kubepick.models.state.config_manager import ConfigManager
from kubepick.models.state.namespace_state import NamespaceState
from kubepick.utils.clock import Clock

logger = logging.getLogger(__name__)

RefreshListener = Callable[[FetchResult], Awaitable[None] | None]


def replace_image_tag(image: str, new_tag: str) -> str:
    """Return ``image`` with its tag (or digest) replaced by ``new_tag``.

    ``registry:5000/team/app:v1`` + ``v2`` -> ``registry:5000/team/app:v2``.
    """
    tag = new_tag.strip()
    if not tag:
        raise ValueError("New image tag must not be empty")
    base = image.split("@", 1)[0]
    name_start = base.rfind("/") + 1
    colon = base.rfind(":")
    if colon >= name_start:
        base = base[:colon]
    return f"{base}:{tag}"


class PickerController:
    """Session/cache core for one picker."""

    SHUTDOWN_TIMEOUT = 2.0

    def __init__(
        self,
        client: KubectlClient | None = None,
        config: ConfigManager | None = None,
        *,
        namespace_state: NamespaceState | None = None,
        supervisor: SessionSupervisor | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.client = client or KubectlClient()
        self.config = config or ConfigManager()
        self.namespace = namespace_state or NamespaceState(self.settings.namespace_mode)
        self.cache = ResourceCache(default_ttl=self.settings.cache_ttl, clock=clock)
        self.supervisor = supervisor or SessionSupervisor()
        self._parser = PodParser()
        self._refresh_timer_id: int | None = None

    @property
    def settings(self) -> Settings:
        return self.config.settings

    def apply_settings(self, **overrides: Any) -> Settings:
        """Replace the settings snapshot and propagate the cache TTL."""
        settings = self.config.setup(**overrides)
        self.cache.default_ttl = settings.cache_ttl
        return settings

    # =========================================================================
    # Listing
    # =========================================================================

    async def list_pods(self, force_refresh: bool = False) -> FetchResult:
        """Pod rows for the current scope, from cache when still valid."""
        scope_key = self.namespace.scope_key
        result = await self.cache.get_or_fetch(
            CacheKey.PODS,
            scope_key,
            lambda: self.client.list_pods(scope_key),
            ttl=self.settings.cache_ttl,
            force_refresh=force_refresh,
        )
        if result.data is None:
            return result
        return replace(result, data=self._parser.parse_pods(result.data))

    async def refresh(self, force: bool = True) -> FetchResult:
        return await self.list_pods(force_refresh=force)

    async def list_namespaces(self, force_refresh: bool = False) -> FetchResult:
        result = await self.cache.get_or_fetch(
            CacheKey.NAMESPACES,
            SCOPE_ALL,
            self.client.list_namespaces,
            ttl=self.settings.cache_ttl,
            force_refresh=force_refresh,
        )
        if result.data is None:
            return result
        return replace(result, data=self._parser.parse_namespaces(result.data))

    async def check_connection(self) -> ClientResult[bool]:
        result = await self.client.check_connection()
        if result.error is not None:
            logger.error("kubectl unavailable: %s", result.error.detail or result.error.message)
        return result

    async def resolve_current_namespace(self, force: bool = False) -> ClientResult[str]:
        """Resolve (and cache) the active context's namespace."""
        cached = self.namespace.current_namespace
        if cached and not force:
            return ClientResult(data=cached)
        result = await self.client.get_current_namespace()
        if result.data:
            self.namespace.current_namespace = result.data
        return result

    # =========================================================================
    # Scope
    # =========================================================================

    def toggle_scope(self) -> NamespaceMode:
        mode = self.namespace.toggle()
        logger.info("Namespace scope: %s", self.namespace.describe())
        return mode

    def select_namespace(self, name: str) -> None:
        self.namespace.select(name)
        logger.info("Namespace scope: %s", self.namespace.describe())

    # =========================================================================
    # Logs
    # =========================================================================

    async def open_log_session(self, target: LogTarget) -> StreamSession:
        """Start a log stream, register it, then let it read output.

        Raises:
            SpawnFailedError: If the subprocess could not be started.
        """
        settings = self.settings
        process = await self.client.spawn_log_stream(target, settings.log_tail_lines)
        session = StreamSession(
            target,
            process,
            max_lines=settings.log_buffer_max_lines,
            follow_mode=settings.log_follow_mode,
            command=self.client.log_command(target, settings.log_tail_lines),
        )
        self.supervisor.register(session)
        session.start()
        return session

    async def open_logs_in_terminal(self, target: LogTarget) -> ClientResult[bool]:
        settings = self.settings
        return await self.client.open_in_terminal(
            target, settings.tmux_split_cmd, settings.log_tail_lines
        )

    def stop_log_session(self, session_id: int) -> bool:
        return self.supervisor.stop(session_id)

    # =========================================================================
    # Workload actions
    # =========================================================================

    async def restart(self, workload: str, namespace: str | None = None) -> ClientResult[bool]:
        result = await self.client.restart_workload(workload, namespace)
        if result.ok:
            self.cache.invalidate(CacheKey.PODS)
        return result

    async def update_image(
        self,
        workload: str,
        container: str,
        new_tag: str,
        image: str,
        namespace: str | None = None,
    ) -> ClientResult[bool]:
        """Point ``container`` of ``workload`` at ``image`` retagged with ``new_tag``.

        Raises:
            ValueError: If ``new_tag`` is empty.
        """
        new_image = replace_image_tag(image, new_tag)
        result = await self.client.set_image(workload, container, new_image, namespace)
        if result.ok:
            self.cache.invalidate(CacheKey.PODS)
        return result

    # =========================================================================
    # Auto-refresh and shutdown
    # =========================================================================

    def start_auto_refresh(self, listener: RefreshListener | None = None) -> int | None:
        """Start the auto-refresh timer if enabled; returns its id."""
        settings = self.settings
        if not settings.auto_refresh or self._refresh_timer_id is not None:
            return self._refresh_timer_id

        async def _tick() -> None:
            result = await self.list_pods(force_refresh=True)
            if listener is not None:
                outcome = listener(result)
                if inspect.isawaitable(outcome):
                    await outcome

        timer = RecurringTimer(settings.auto_refresh_interval, _tick, name="auto-refresh")
        self._refresh_timer_id = self.supervisor.register_timer(timer)
        timer.start()
        return self._refresh_timer_id

    def stop_auto_refresh(self) -> bool:
        timer_id, self._refresh_timer_id = self._refresh_timer_id, None
        if timer_id is None:
            return False
        return self.supervisor.cancel_timer(timer_id)

    async def shutdown(self, timeout: float | None = None) -> None:
        """Stop every session and timer, then wait briefly for processes to exit."""
        self._refresh_timer_id = None
        sessions = self.supervisor.stop_all()
        if sessions:
            wait_timeout = self.SHUTDOWN_TIMEOUT if timeout is None else timeout
            await asyncio.gather(*(session.wait_closed(wait_timeout) for session in sessions))


__all__ = ["PickerController", "replace_image_tag"]
