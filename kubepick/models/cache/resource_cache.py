"""TTL resource cache keyed by resource kind and scope."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from typing import Any

from kubepick.constants.defaults import CACHE_TTL_DEFAULT
from kubepick.constants.enums import CacheKey
from kubepick.exceptions import CacheKeyError, ClusterError
from kubepick.models.core.client_result import ClientResult
from kubepick.utils.clock import Clock, SystemClock

logger = logging.getLogger(__name__)

FetchFn = Callable[[], Awaitable[ClientResult[Any]]]


@dataclass
class CacheEntry:
    """One cached value. ``data is None`` iff ``fetched_at == 0``."""

    data: Any = None
    fetched_at: float = 0.0
    scope_key: str | None = None

    def is_valid(self, now: float, ttl: float, scope_key: str) -> bool:
        return (
            self.data is not None
            and now - self.fetched_at < ttl
            and self.scope_key == scope_key
        )

    def clear(self) -> None:
        self.data = None
        self.fetched_at = 0.0


@dataclass
class FetchResult:
    """Outcome of ``ResourceCache.get_or_fetch``.

    On a failed refresh ``error`` is set and ``data`` holds the previous
    value for the same scope (``stale=True``) or None when there is none.
    """

    data: Any = None
    error: ClusterError | None = None
    from_cache: bool = False
    stale: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


class ResourceCache:
    """TTL cache with force-refresh override and manual invalidation.

    Reads are lock-free. Fetches for a key are serialized with a per-key
    lock, so a caller that waited on an in-flight fetch for the same scope
    gets the stored result instead of fetching again.
    """

    def __init__(self, default_ttl: float = CACHE_TTL_DEFAULT, clock: Clock | None = None) -> None:
        self.default_ttl = default_ttl
        self._clock = clock or SystemClock()
        self._entries: dict[CacheKey, CacheEntry] = {key: CacheEntry() for key in CacheKey}
        self._locks: dict[CacheKey, asyncio.Lock] = {key: asyncio.Lock() for key in CacheKey}

    @staticmethod
    def _resolve_key(key: CacheKey | str) -> CacheKey:
        try:
            return CacheKey(key)
        except ValueError:
            raise CacheKeyError(key) from None

    def entry(self, key: CacheKey | str) -> CacheEntry:
        """Return a copy of the entry for ``key``."""
        return replace(self._entries[self._resolve_key(key)])

    def is_valid(self, key: CacheKey | str, scope_key: str, ttl: float | None = None) -> bool:
        entry = self._entries[self._resolve_key(key)]
        effective_ttl = self.default_ttl if ttl is None else ttl
        return entry.is_valid(self._clock.monotonic(), effective_ttl, scope_key)

    async def get_or_fetch(
        self,
        key: CacheKey | str,
        scope_key: str,
        fetch_fn: FetchFn,
        ttl: float | None = None,
        force_refresh: bool = False,
    ) -> FetchResult:
        """Return cached data for ``key``/``scope_key`` or fetch it.

        Args:
            key: Cache key (``pods`` or ``namespaces``).
            scope_key: Resolved scope; a different scope is always a miss.
            fetch_fn: Zero-argument coroutine function returning a ``ClientResult``.
            ttl: Time-to-live in seconds (uses ``default_ttl`` if None).
            force_refresh: Fetch even when the entry is valid.

        Raises:
            CacheKeyError: If ``key`` is not a known cache key.
        """
        cache_key = self._resolve_key(key)
        effective_ttl = self.default_ttl if ttl is None else ttl
        entry = self._entries[cache_key]

        if not force_refresh and entry.is_valid(self._clock.monotonic(), effective_ttl, scope_key):
            logger.debug("Cache hit: %s [%s]", cache_key.value, scope_key)
            return FetchResult(data=entry.data, from_cache=True)

        async with self._locks[cache_key]:
            if not force_refresh and entry.is_valid(
                self._clock.monotonic(), effective_ttl, scope_key
            ):
                logger.debug("Cache filled while waiting: %s [%s]", cache_key.value, scope_key)
                return FetchResult(data=entry.data, from_cache=True)

            logger.debug("Cache miss: %s [%s]", cache_key.value, scope_key)
            result = await fetch_fn()

            if result.error is not None:
                logger.warning(
                    "Fetch failed for %s [%s]: %s", cache_key.value, scope_key, result.error
                )
                previous = entry.data if entry.scope_key == scope_key else None
                return FetchResult(data=previous, error=result.error, stale=previous is not None)

            if result.data is not None:
                entry.data = result.data
                entry.fetched_at = self._clock.monotonic()
                entry.scope_key = scope_key
            return FetchResult(data=result.data)

    def invalidate(self, key: CacheKey | str) -> None:
        """Clear the entry for ``key``. Idempotent."""
        cache_key = self._resolve_key(key)
        self._entries[cache_key].clear()
        logger.debug("Invalidated cache: %s", cache_key.value)

    def invalidate_all(self) -> None:
        for key in CacheKey:
            self.invalidate(key)


__all__ = [
    "CacheEntry",
    "FetchResult",
    "ResourceCache",
]
