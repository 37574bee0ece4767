"""Data schemas using msgspec for high-performance serialization."""

from chronoelite.schemas.base import BaseStruct
from chronoelite.schemas.cache import CacheEntry, CacheStats
from chronoelite.schemas.health import HealthStatus, SampleResponse, SampleWatch
from chronoelite.schemas.watch import Watch, WatchDetail, WatchFilters, WatchImages, WatchSort

__all__ = (
    "BaseStruct",
    "CacheEntry",
    "CacheStats",
    "HealthStatus",
    "SampleResponse",
    "SampleWatch",
    "Watch",
    "WatchDetail",
    "WatchFilters",
    "WatchImages",
    "WatchSort",
)
