"""Dependency providers for the catalog services."""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING

from chronoelite.config import db, settings, sqlspec
from chronoelite.services.catalog import CatalogService

if TYPE_CHECKING:
    from litestar.datastructures import State


async def provide_catalog_service(state: State) -> CatalogService:
    """Provide the catalog service bound to the process-wide response cache.

    Database sessions are checked out lazily inside the service, so a database
    outage reaches the service's fallback handling instead of failing injection.
    """
    return CatalogService(
        cache=state.response_cache,
        session_factory=partial(sqlspec.provide_session, db),
        featured_watch_id=settings.catalog.FEATURED_WATCH_ID,
        all_categories=settings.catalog.ALL_CATEGORIES,
        fallback_ttl=settings.cache.FALLBACK_TTL_SECONDS,
    )
