"""Cache-related schemas."""

from typing import Any

import msgspec

__all__ = ("CacheEntry", "CacheStats")


class CacheEntry(msgspec.Struct, gc=False):
    """A cached value and the monotonic instant it stops being served."""

    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class CacheStats(msgspec.Struct, gc=False):
    """Response cache counters."""

    entries: int
    hits: int
    misses: int
