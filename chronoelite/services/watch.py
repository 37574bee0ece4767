"""Watch service for reading the catalog tables."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from chronoelite.db import queries
from chronoelite.lib.projection import ProjectionMode, project_row
from chronoelite.schemas import SampleWatch, Watch, WatchDetail
from chronoelite.services.base import SQLSpecService

if TYPE_CHECKING:
    from datetime import datetime

    from chronoelite.schemas import WatchFilters


class WatchService(SQLSpecService):
    """Handles the catalog's read-only queries using SQLSpec patterns."""

    async def list_watches(self, filters: WatchFilters) -> list[Watch]:
        """List watches matching normalized filters.

        Args:
            filters: Normalized listing filters

        Returns:
            Watches in list mode, in the requested order
        """
        query = queries.build_watch_list_query(filters)
        rows = await self.driver.select(query.sql, **query.parameters)
        return [cast("Watch", project_row(row)) for row in rows]

    async def top_by_price(self) -> list[Watch]:
        """The two most expensive watches, for the comparison section."""
        query = queries.build_compare_query()
        rows = await self.driver.select(query.sql, **query.parameters)
        return [cast("Watch", project_row(row)) for row in rows]

    async def get_by_id(self, watch_id: int) -> WatchDetail | None:
        """Get a watch with its images.

        Args:
            watch_id: Watch id

        Returns:
            Watch in detail mode or None if not found
        """
        row = await self.driver.select_one_or_none(queries.WATCH_DETAIL, watch_id=watch_id)
        if row is None:
            return None
        return cast("WatchDetail", project_row(row, ProjectionMode.DETAIL))

    async def database_time(self) -> datetime:
        return await self.driver.select_value(queries.DATABASE_TIME)

    async def sample(self, limit: int = 3) -> list[SampleWatch]:
        return await self.driver.select(queries.SAMPLE_WATCHES, limit_count=limit, schema_type=SampleWatch)
