"""Catalog service: response cache in front of the watch queries."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import asyncpg
import structlog
from sqlspec.exceptions import SQLSpecError

from chronoelite.lib.exceptions import CatalogUnavailableError, InvalidWatchIdError, WatchNotFoundError
from chronoelite.lib.fallback import comparison_fallback, featured_fallback
from chronoelite.services.watch import WatchService

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable
    from contextlib import AbstractAsyncContextManager
    from datetime import datetime

    from sqlspec.driver import AsyncDriverAdapterBase

    from chronoelite.schemas import SampleWatch, Watch, WatchDetail, WatchFilters
    from chronoelite.services.cache import CacheService

    SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncDriverAdapterBase]]

logger = structlog.get_logger()

DATABASE_ERRORS: tuple[type[BaseException], ...] = (
    SQLSpecError,
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    TimeoutError,
)
"""Failures that mean the catalog database could not answer."""

COMPARE_CACHE_KEY = "compare_watches"
FEATURED_CACHE_KEY = "featured_watch"
MAX_WATCH_ID = 2**31 - 1


class CatalogService:
    """Serves catalog reads from the response cache or the database.

    A miss checks out one pooled session, runs the query, projects the rows and
    stores the result. The comparison and featured endpoints substitute static
    payloads when the database fails, cached for a shorter time so fresh data
    returns soon after the database recovers. Every other read surfaces the
    failure as :class:`CatalogUnavailableError`.
    """

    def __init__(
        self,
        cache: CacheService,
        session_factory: SessionFactory,
        *,
        featured_watch_id: int = 1,
        all_categories: str = "Todos",
        fallback_ttl: float = 10,
    ) -> None:
        self.cache = cache
        self._session_factory = session_factory
        self.featured_watch_id = featured_watch_id
        self.all_categories = all_categories
        self.fallback_ttl = fallback_ttl

    @asynccontextmanager
    async def _watches(self) -> AsyncIterator[WatchService]:
        """Check out a session; it goes back to the pool on every exit path."""
        async with self._session_factory() as driver:
            yield WatchService(driver)

    async def list_watches(self, filters: WatchFilters) -> list[Watch]:
        """List watches, cached per canonical filter set.

        Raises:
            CatalogUnavailableError: If the database query fails
        """
        filters = filters.normalized(self.all_categories)
        cache_key = filters.cache_key()
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            async with self._watches() as watch_service:
                watches = await watch_service.list_watches(filters)
        except DATABASE_ERRORS as e:
            logger.exception("Database error listing watches", cache_key=cache_key)
            raise CatalogUnavailableError(details=str(e)) from e

        self.cache.set(cache_key, watches)
        return watches

    async def compare_watches(self) -> list[Watch]:
        """The two most expensive watches, or the static pair if the database fails."""
        cached = self.cache.get(COMPARE_CACHE_KEY)
        if cached is not None:
            return cached

        try:
            async with self._watches() as watch_service:
                watches = await watch_service.top_by_price()
        except DATABASE_ERRORS as e:
            logger.warning("Serving comparison fallback", error=str(e), ttl=self.fallback_ttl)
            watches = comparison_fallback()
            self.cache.set(COMPARE_CACHE_KEY, watches, ttl=self.fallback_ttl)
            return watches

        self.cache.set(COMPARE_CACHE_KEY, watches)
        return watches

    async def featured_watch(self) -> WatchDetail:
        """The featured watch, or the static one if the database fails.

        Raises:
            WatchNotFoundError: If the featured watch does not exist
        """
        cached = self.cache.get(FEATURED_CACHE_KEY)
        if cached is not None:
            return cached

        try:
            async with self._watches() as watch_service:
                watch = await watch_service.get_by_id(self.featured_watch_id)
        except DATABASE_ERRORS as e:
            logger.warning("Serving featured fallback", error=str(e), ttl=self.fallback_ttl)
            watch = featured_fallback()
            self.cache.set(FEATURED_CACHE_KEY, watch, ttl=self.fallback_ttl)
            return watch

        if watch is None:
            msg = "No featured watch found"
            raise WatchNotFoundError(msg)
        self.cache.set(FEATURED_CACHE_KEY, watch)
        return watch

    async def get_watch(self, watch_id: str) -> WatchDetail:
        """Get a watch by the raw id from the request path.

        Args:
            watch_id: Path segment, must be all digits

        Raises:
            InvalidWatchIdError: If ``watch_id`` is not numeric
            WatchNotFoundError: If there is no such watch
            CatalogUnavailableError: If the database query fails
        """
        if not (watch_id.isascii() and watch_id.isdigit()):
            raise InvalidWatchIdError
        numeric_id = int(watch_id)
        if numeric_id > MAX_WATCH_ID:
            raise WatchNotFoundError

        cache_key = f"watch:{numeric_id}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            async with self._watches() as watch_service:
                watch = await watch_service.get_by_id(numeric_id)
        except DATABASE_ERRORS as e:
            logger.exception("Database error fetching watch", watch_id=numeric_id)
            msg = "Failed to fetch watch"
            raise CatalogUnavailableError(msg, details=str(e)) from e

        if watch is None:
            raise WatchNotFoundError
        self.cache.set(cache_key, watch)
        return watch

    async def database_time(self) -> datetime:
        """Current database time, uncached.

        Raises:
            CatalogUnavailableError: If the database can't be reached
        """
        try:
            async with self._watches() as watch_service:
                return await watch_service.database_time()
        except DATABASE_ERRORS as e:
            logger.exception("Health check failed")
            msg = "Database unavailable"
            raise CatalogUnavailableError(msg, details=str(e)) from e

    async def sample_watches(self) -> list[SampleWatch]:
        """A few rows straight from the database, uncached."""
        try:
            async with self._watches() as watch_service:
                return await watch_service.sample()
        except DATABASE_ERRORS as e:
            logger.exception("Database smoke test failed")
            raise CatalogUnavailableError(details=str(e)) from e
