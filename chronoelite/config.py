"""Application configuration management."""

from __future__ import annotations

import logging
from pathlib import Path

import structlog
from litestar.config.compression import CompressionConfig
from litestar.config.cors import CORSConfig
from litestar.logging.config import (
    LoggingConfig,
    StructLoggingConfig,
    default_logger_factory,
)
from litestar.middleware.logging import LoggingMiddlewareConfig
from litestar.plugins.structlog import StructlogConfig
from sqlspec.adapters.asyncpg import AsyncpgConfig
from sqlspec.extensions.litestar import DatabaseConfig, SQLSpec

from chronoelite.lib import log as log_conf
from chronoelite.lib.exceptions import ApplicationError
from chronoelite.lib.settings import get_settings

settings = get_settings()


compression = CompressionConfig(backend="gzip")
cors = CORSConfig(
    allow_origins=settings.app.ALLOWED_CORS_ORIGINS,
    allow_origin_regex=settings.app.ALLOWED_CORS_ORIGIN_REGEX,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    allow_credentials=True,
)
db = AsyncpgConfig(
    pool_config={
        "dsn": settings.db.URL,
        "min_size": settings.db.POOL_MIN_SIZE,
        "max_size": settings.db.POOL_MAX_SIZE,
        "timeout": settings.db.CONNECT_TIMEOUT,
        "command_timeout": settings.db.COMMAND_TIMEOUT,
        "ssl": settings.db.SSL_MODE,
    },
    migration_config={
        "version_table_name": "migrations",
        "script_location": settings.db.MIGRATION_PATH,
        "project_root": Path(__file__).parent.parent,
    },
)

# SQLSpec database manager
sqlspec = SQLSpec(config=DatabaseConfig(commit_mode="autocommit", config=db))

# Matched by exact class. Application errors are logged where they are raised.
quiet_exceptions: set[int | type[Exception]] = {400, 404, 405, ApplicationError, *ApplicationError.__subclasses__()}


log = StructlogConfig(
    enable_middleware_logging=True,
    structlog_logging_config=StructLoggingConfig(
        log_exceptions="always",
        processors=log_conf.structlog_processors(as_json=not log_conf.is_tty()),
        logger_factory=default_logger_factory(as_json=not log_conf.is_tty()),
        disable_stack_trace=quiet_exceptions,
        standard_lib_logging_config=LoggingConfig(
            log_exceptions="always",
            disable_stack_trace=quiet_exceptions,
            root={"level": logging.getLevelName(settings.log.LEVEL), "handlers": ["queue_listener"]},
            formatters={
                "standard": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processors": log_conf.stdlib_logger_processors(as_json=not log_conf.is_tty()),
                },
            },
            loggers={
                "sqlspec": {
                    "propagate": False,
                    "level": settings.log.SQLSPEC_LEVEL,
                    "handlers": ["queue_listener"],
                },
                "sqlglot": {
                    "propagate": False,
                    "level": settings.log.SQLGLOT_LEVEL,
                    "handlers": ["queue_listener"],
                },
                "_granian": {
                    "propagate": False,
                    "level": settings.log.ASGI_ERROR_LEVEL,
                    "handlers": ["queue_listener"],
                },
                "granian.server": {
                    "propagate": False,
                    "level": settings.log.ASGI_ERROR_LEVEL,
                    "handlers": ["queue_listener"],
                },
                "granian.access": {
                    "propagate": False,
                    "level": settings.log.ASGI_ACCESS_LEVEL,
                    "handlers": ["queue_listener"],
                },
            },
        ),
    ),
    middleware_logging_config=LoggingMiddlewareConfig(
        request_log_fields=settings.log.REQUEST_FIELDS,
        response_log_fields=settings.log.RESPONSE_FIELDS,
    ),
)
