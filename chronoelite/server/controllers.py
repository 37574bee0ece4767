"""HTTP controllers for the watch catalog API."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Annotated, Any

from litestar import Controller, MediaType, Response, get
from litestar.params import Parameter
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR

from chronoelite.lib.exceptions import CatalogUnavailableError, InvalidFilterError
from chronoelite.schemas import HealthStatus, SampleResponse, Watch, WatchDetail, WatchFilters, WatchSort
from chronoelite.services.catalog import CatalogService  # noqa: TC001


class SystemController(Controller):
    """Health probe and database smoke test."""

    @get(path="/api/health", name="system.health")
    async def health(self, catalog_service: CatalogService) -> Response[HealthStatus | dict[str, str]]:
        """Report whether the database answers."""
        try:
            database_time = await catalog_service.database_time()
        except CatalogUnavailableError as e:
            return Response(
                content={"status": "unhealthy", "error": str(e.details)},
                status_code=HTTP_500_INTERNAL_SERVER_ERROR,
                media_type=MediaType.JSON,
            )
        return Response(
            content=HealthStatus(status="healthy", timestamp=datetime.now(UTC), database_time=database_time),
            media_type=MediaType.JSON,
        )

    @get(path="/api/test", name="system.test")
    async def smoke_test(self, catalog_service: CatalogService) -> Response[SampleResponse | dict[str, Any]]:
        """Read a few watches straight from the database."""
        try:
            watches = await catalog_service.sample_watches()
        except CatalogUnavailableError as e:
            return Response(
                content={"success": False, "error": str(e.details)},
                status_code=HTTP_500_INTERNAL_SERVER_ERROR,
                media_type=MediaType.JSON,
            )
        return Response(
            content=SampleResponse(success=True, count=len(watches), watches=watches),
            media_type=MediaType.JSON,
        )


class WatchController(Controller):
    """Catalog endpoints consumed by the storefront."""

    path = "/api/watches"

    @staticmethod
    def validate_filters(min_price: int | None, max_price: int | None, limit: int | None) -> None:
        """Reject numeric filters that would silently widen or empty the result."""
        errors: list[dict[str, Any]] = []
        if min_price is not None and min_price < 0:
            errors.append({"key": "minPrice", "message": "must be a non-negative integer"})
        if max_price is not None and max_price < 0:
            errors.append({"key": "maxPrice", "message": "must be a non-negative integer"})
        if limit is not None and limit < 1:
            errors.append({"key": "limit", "message": "must be a positive integer"})
        if errors:
            raise InvalidFilterError(details=errors)

    @get(path="/", name="watches.list")
    async def list_watches(
        self,
        catalog_service: CatalogService,
        category: str | None = None,
        min_price: Annotated[int | None, Parameter(query="minPrice")] = None,
        max_price: Annotated[int | None, Parameter(query="maxPrice")] = None,
        search: str | None = None,
        sort_by: Annotated[str | None, Parameter(query="sortBy")] = None,
        limit: int | None = None,
    ) -> list[Watch]:
        """List watches, filtered and sorted."""
        self.validate_filters(min_price, max_price, limit)
        filters = WatchFilters(
            category=category,
            min_price=min_price,
            max_price=max_price,
            search=search,
            sort_by=WatchSort.parse(sort_by),
            limit=limit,
        )
        return await catalog_service.list_watches(filters)

    @get(path="/compare", name="watches.compare")
    async def compare_watches(self, catalog_service: CatalogService) -> list[Watch]:
        """The two most expensive watches, side by side."""
        return await catalog_service.compare_watches()

    @get(path="/featured", name="watches.featured")
    async def featured_watch(self, catalog_service: CatalogService) -> WatchDetail:
        """The watch highlighted on the landing page."""
        return await catalog_service.featured_watch()

    @get(path="/{watch_id:str}", name="watches.show")
    async def get_watch(self, watch_id: str, catalog_service: CatalogService) -> WatchDetail:
        """A single watch with its image gallery."""
        return await catalog_service.get_watch(watch_id)
