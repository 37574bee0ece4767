"""In-memory response cache with per-entry time to live."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING, Any

import structlog

from chronoelite.schemas.cache import CacheEntry, CacheStats

if TYPE_CHECKING:
    from collections.abc import Callable

logger = structlog.get_logger()


class CacheService:
    """Process-wide key/value store for catalog responses.

    Entries expire a fixed number of seconds after they are written; expired
    entries are dropped when read and by :meth:`cleanup_expired`. There is no
    size bound and no LRU eviction, which is fine for a catalog of a few dozen
    watches but grows with the number of distinct filter combinations.

    Writes are unconditional overwrites, so concurrent requests need no locking
    on a single event loop.
    """

    def __init__(self, default_ttl: float = 60, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize the cache.

        Args:
            default_ttl: Seconds an entry lives when ``set`` gets no ``ttl``
            clock: Monotonic time source, replaceable in tests
        """
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    def get(self, cache_key: str) -> Any | None:
        """Get a live cached value.

        Args:
            cache_key: Cache key to lookup

        Returns:
            Cached value or None if missing or expired
        """
        entry = self._entries.get(cache_key)
        if entry is None:
            self._misses += 1
            return None
        if entry.is_expired(self._clock()):
            self._entries.pop(cache_key, None)
            self._misses += 1
            return None
        self._hits += 1
        return entry.value

    def set(self, cache_key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value, replacing any previous entry.

        Args:
            cache_key: Cache key
            value: Value to cache
            ttl: Time to live in seconds, the instance default when omitted
        """
        ttl = self.default_ttl if ttl is None else ttl
        self._entries[cache_key] = CacheEntry(value=value, expires_at=self._clock() + ttl)

    def delete(self, cache_key: str) -> bool:
        return self._entries.pop(cache_key, None) is not None

    def clear(self) -> int:
        """Drop every entry.

        Returns:
            Number of entries removed
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def cleanup_expired(self) -> int:
        """Remove expired entries.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def get_cache_stats(self) -> CacheStats:
        return CacheStats(entries=len(self._entries), hits=self._hits, misses=self._misses)


async def sweep_expired(cache: CacheService, interval: float) -> None:
    """Purge expired entries every ``interval`` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        removed = cache.cleanup_expired()
        if removed:
            stats = cache.get_cache_stats()
            logger.debug("Purged expired cache entries", removed=removed, entries=stats.entries)
