"""Resource cache."""

from kubepick.models.cache.resource_cache import CacheEntry, FetchResult, ResourceCache

__all__ = ["CacheEntry", "FetchResult", "ResourceCache"]
