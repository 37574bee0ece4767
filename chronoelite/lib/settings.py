"""Application settings management."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, cast

from litestar.data_extractors import RequestExtractorField

from chronoelite.utils.env import get_env

if TYPE_CHECKING:
    from collections.abc import Callable

    from litestar.data_extractors import ResponseExtractorField

DEFAULT_MODULE_NAME = "chronoelite"
BASE_DIR = Path(__file__).parent.parent
SSL_MODES = {"disable", "allow", "prefer", "require", "verify-ca", "verify-full"}


@dataclass
class DatabaseSettings:
    """Database configuration settings."""

    URL: str = field(default_factory=get_env("DATABASE_URL", ""))
    """Database URL. Required, there is no default."""
    SSL_MODE: str = field(default_factory=get_env("DATABASE_SSL_MODE", "require"))
    """libpq style SSL mode handed to asyncpg."""
    CONNECT_TIMEOUT: float = field(default_factory=get_env("DATABASE_CONNECT_TIMEOUT", 10.0))
    """Seconds to wait while establishing a connection."""
    COMMAND_TIMEOUT: float = field(default_factory=get_env("DATABASE_COMMAND_TIMEOUT", 30.0))
    """Seconds a single statement may run before it is cancelled."""
    POOL_MIN_SIZE: int = field(default_factory=get_env("DATABASE_POOL_MIN_SIZE", 0))
    """Connections opened when the pool is created.

    Above zero the pool connects during startup, so the API refuses to start
    while the database is down instead of serving its fallbacks.
    """
    POOL_MAX_SIZE: int = field(default_factory=get_env("DATABASE_POOL_MAX_SIZE", 10))
    """Max size for database connection pool"""
    MIGRATION_PATH: str = field(default_factory=get_env("DATABASE_MIGRATION_PATH", f"{BASE_DIR}/db/migrations"))
    """The path to database migrations."""
    FIXTURE_PATH: str = field(default_factory=get_env("DATABASE_FIXTURE_PATH", f"{BASE_DIR}/db/fixtures"))
    """The path to JSON fixture data."""

    def __post_init__(self) -> None:
        if not self.URL:
            msg = "DATABASE_URL is not set."
            raise ValueError(msg)
        if self.SSL_MODE not in SSL_MODES:
            msg = f"DATABASE_SSL_MODE must be one of {sorted(SSL_MODES)}, got {self.SSL_MODE!r}."
            raise ValueError(msg)


@dataclass
class ServerSettings:
    """Settings handed to ``litestar run``."""

    HOST: str = field(default_factory=get_env("HOST", "0.0.0.0"))  # noqa: S104
    """Interface to bind."""
    PORT: int = field(default_factory=get_env("PORT", 10000))
    """Port to listen on."""


@dataclass
class CacheSettings:
    """Response cache configuration."""

    TTL_SECONDS: int = field(default_factory=get_env("CACHE_TTL_SECONDS", 60))
    """Lifetime of a cached catalog response."""
    FALLBACK_TTL_SECONDS: int = field(default_factory=get_env("CACHE_FALLBACK_TTL_SECONDS", 10))
    """Lifetime of a cached fallback payload, shorter so recovery is picked up quickly."""
    SWEEP_INTERVAL_SECONDS: int = field(default_factory=get_env("CACHE_SWEEP_INTERVAL_SECONDS", 60))
    """How often expired entries are purged. ``0`` disables the sweep."""


@dataclass
class CatalogSettings:
    """Catalog behaviour."""

    FEATURED_WATCH_ID: int = field(default_factory=get_env("CATALOG_FEATURED_WATCH_ID", 1))
    """Watch shown by the featured endpoint."""
    ALL_CATEGORIES: str = field(default_factory=get_env("CATALOG_ALL_CATEGORIES", "Todos"))
    """Category value the storefront sends to mean "no category filter"."""


@dataclass
class LogSettings:
    """Logger configuration."""

    LEVEL: int = field(default_factory=get_env("LOG_LEVEL", 20))
    """Stdlib log levels.

    Only emit logs at this level, or higher.
    """
    REQUEST_FIELDS: list[RequestExtractorField] = field(
        default_factory=get_env(
            "LOG_REQUEST_FIELDS",
            [
                "path",
                "method",
                "query",
                "path_params",
            ],
            list[str],
        ),
    )
    """Attributes of the Request to be logged."""
    RESPONSE_FIELDS: list[ResponseExtractorField] = field(
        default_factory=cast(
            "Callable[[],list[ResponseExtractorField]]",
            get_env(
                "LOG_RESPONSE_FIELDS",
                ["status_code"],
            ),
        ),
    )
    """Attributes of the Response to be logged."""
    SQLSPEC_LEVEL: int = field(default_factory=get_env("SQLSPEC_LOG_LEVEL", 30))
    """Level to log SQLSpec logs."""
    SQLGLOT_LEVEL: int = field(default_factory=get_env("SQLGLOT_LOG_LEVEL", 40))
    """Level to log SQLGlot logs."""
    ASGI_ACCESS_LEVEL: int = field(default_factory=get_env("ASGI_ACCESS_LOG_LEVEL", 30))
    """Level to log granian access logs."""
    ASGI_ERROR_LEVEL: int = field(default_factory=get_env("ASGI_ERROR_LOG_LEVEL", 30))
    """Level to log granian error logs."""


@dataclass
class AppSettings:
    """Application configuration."""

    NAME: str = field(default_factory=lambda: "ChronoElite Catalog API")
    """Application name."""
    VERSION: str = field(default="1.0.0")
    """Current application version."""
    DEBUG: bool = field(default_factory=get_env("DEBUG", False))
    """Run application with debug mode."""
    ALLOWED_CORS_ORIGINS: list[str] = field(
        default_factory=get_env(
            "ALLOWED_CORS_ORIGINS",
            ["http://localhost:8080", "http://localhost:3000"],
            list[str],
        ),
    )
    """Origins allowed to call the API, as a JSON list or comma separated."""
    ALLOWED_CORS_ORIGIN_REGEX: str | None = field(
        default_factory=get_env("ALLOWED_CORS_ORIGIN_REGEX", r"https://([a-z0-9-]+\.)*vercel\.app"),
    )
    """Regex of additional allowed origins (preview deployments)."""

    def __post_init__(self) -> None:
        if not self.ALLOWED_CORS_ORIGIN_REGEX:
            self.ALLOWED_CORS_ORIGIN_REGEX = None


@dataclass
class Settings:
    """Main application settings."""

    app: AppSettings = field(default_factory=AppSettings)
    db: DatabaseSettings = field(default_factory=DatabaseSettings)
    server: ServerSettings = field(default_factory=ServerSettings)
    cache: CacheSettings = field(default_factory=CacheSettings)
    catalog: CatalogSettings = field(default_factory=CatalogSettings)
    log: LogSettings = field(default_factory=LogSettings)

    @classmethod
    @lru_cache(maxsize=1, typed=True)
    def from_env(cls, dotenv_filename: str = ".env") -> Settings:
        from dotenv import load_dotenv

        env_file = Path(f"{os.curdir}/{dotenv_filename}")
        if env_file.is_file():
            load_dotenv(env_file, override=True)

        try:
            app: AppSettings = AppSettings()
            database: DatabaseSettings = DatabaseSettings()
            server: ServerSettings = ServerSettings()
            cache: CacheSettings = CacheSettings()
            catalog: CatalogSettings = CatalogSettings()
            log: LogSettings = LogSettings()
        except (ValueError, TypeError, KeyError) as e:
            import structlog

            logger = structlog.get_logger()
            logger.fatal("Could not load settings", error=str(e))
            sys.exit(1)

        return Settings(app=app, db=database, server=server, cache=cache, catalog=catalog, log=log)


def get_settings(dotenv_filename: str = ".env") -> Settings:
    """Get application settings."""
    return Settings.from_env(dotenv_filename)
