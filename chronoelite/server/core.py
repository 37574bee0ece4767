"""Application core plugin."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, suppress
from typing import TYPE_CHECKING

import structlog
from litestar.di import Provide
from litestar.plugins import CLIPluginProtocol, InitPluginProtocol

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from click import Group
    from litestar import Litestar
    from litestar.config.app import AppConfig


logger = structlog.get_logger()


class ApplicationCore(InitPluginProtocol, CLIPluginProtocol):
    """Application core configuration plugin.

    This class is responsible for configuring the main Litestar application
    with routes, dependencies, the response cache and the plugins it relies on.
    """

    __slots__ = ("app_name",)
    app_name: str

    def __init__(self) -> None:
        """Initialize the plugin."""

    def on_cli_init(self, cli: Group) -> None:
        """Register catalog commands on the SQLSpec database group."""
        from chronoelite.lib.settings import get_settings

        self.app_name = get_settings().app.NAME

        from chronoelite.cli import commands  # noqa: F401

    @asynccontextmanager
    async def cache_lifespan(self, app: Litestar) -> AsyncGenerator[None, None]:
        """Run the expired-entry sweep of the response cache.

        Args:
            app: The Litestar application instance.

        Yields:
            None during application runtime.
        """
        from chronoelite.lib.settings import get_settings
        from chronoelite.services.cache import sweep_expired

        interval = get_settings().cache.SWEEP_INTERVAL_SECONDS
        if interval <= 0:
            yield
            return

        logger.info("Starting response cache sweep", interval=interval)
        task = asyncio.create_task(sweep_expired(app.state.response_cache, interval))
        try:
            yield
        finally:
            logger.info("Stopping response cache sweep")
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Configure application for use with SQLSpec and our services.

        Args:
            app_config: The AppConfig instance.

        Returns:
            The configured app config.
        """
        from litestar.openapi import OpenAPIConfig
        from litestar.openapi.plugins import ScalarRenderPlugin

        from chronoelite import config
        from chronoelite.lib.log import after_exception_hook_handler
        from chronoelite.lib.settings import get_settings
        from chronoelite.server import deps, plugins
        from chronoelite.server.controllers import SystemController, WatchController
        from chronoelite.server.exceptions import exception_handlers
        from chronoelite.services.cache import CacheService
        from chronoelite.services.catalog import CatalogService

        settings = get_settings()
        self.app_name = settings.app.NAME
        app_config.debug = settings.app.DEBUG

        app_config.lifespan = [self.cache_lifespan]
        app_config.after_exception.append(after_exception_hook_handler)

        # OpenAPI configuration
        app_config.openapi_config = OpenAPIConfig(
            title=settings.app.NAME,
            version=settings.app.VERSION,
            use_handler_docstrings=True,
            render_plugins=[ScalarRenderPlugin(version="latest")],
        )
        app_config.cors_config = config.cors
        app_config.compression_config = config.compression
        app_config.plugins.extend(
            [
                plugins.structlog,
                plugins.granian,
                plugins.sqlspec,
            ],
        )

        app_config.exception_handlers.update(exception_handlers)  # type: ignore[arg-type]
        app_config.route_handlers.extend([SystemController, WatchController])

        # One cache per process, shared by every request
        app_config.state.response_cache = CacheService(default_ttl=settings.cache.TTL_SECONDS)

        app_config.signature_namespace.update({"CatalogService": CatalogService})

        # Configure app-level dependencies
        app_config.dependencies = app_config.dependencies or {}
        app_config.dependencies["catalog_service"] = Provide(deps.provide_catalog_service)
        return app_config
