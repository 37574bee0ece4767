"""Service layer for the watch catalog."""

from __future__ import annotations

from chronoelite.services.base import SQLSpecService
from chronoelite.services.cache import CacheService
from chronoelite.services.catalog import CatalogService
from chronoelite.services.watch import WatchService

__all__ = (
    "CacheService",
    "CatalogService",
    "SQLSpecService",
    "WatchService",
)
