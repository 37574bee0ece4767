from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from litestar import Litestar
from litestar.di import Provide
from litestar.testing import AsyncTestClient

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from chronoelite.services.catalog import CatalogService


@pytest.fixture
def app(catalog_service: CatalogService) -> Litestar:
    """Create an app wired to the in-memory catalog service."""
    from chronoelite import config
    from chronoelite.server.controllers import SystemController, WatchController
    from chronoelite.server.exceptions import exception_handlers

    return Litestar(
        route_handlers=[SystemController, WatchController],
        dependencies={"catalog_service": Provide(lambda: catalog_service, sync_to_thread=False)},
        exception_handlers=exception_handlers,
        cors_config=config.cors,
    )


@pytest.fixture
async def client(app: Litestar) -> AsyncGenerator[AsyncTestClient, None]:
    """Create test client."""
    async with AsyncTestClient(app=app) as c:
        yield c
