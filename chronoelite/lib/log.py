"""Structlog processor chains and exception hooks."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import structlog
from litestar.exceptions import HTTPException
from litestar.logging.config import default_json_serializer, stdlib_json_serializer

from chronoelite.lib.exceptions import ApplicationError

if TYPE_CHECKING:
    from litestar.types import Scope
    from structlog.typing import EventDict, Processor, WrappedLogger

logger = structlog.get_logger()


def is_tty() -> bool:
    return bool(sys.stderr.isatty() or sys.stdout.isatty())


class EventFilter:
    """Drop keys from the event dict before rendering."""

    def __init__(self, filter_keys: list[str]) -> None:
        self.filter_keys = filter_keys

    def __call__(self, _: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
        for key in self.filter_keys:
            event_dict.pop(key, None)
        return event_dict


def _renderer(as_json: bool, *, as_bytes: bool) -> Processor:
    """Final processor of a chain.

    Chains feeding structlog's ``BytesLogger`` must render bytes, chains feeding
    the stdlib ``ProcessorFormatter`` must render text.
    """
    if as_json:
        return structlog.processors.JSONRenderer(
            serializer=default_json_serializer if as_bytes else stdlib_json_serializer,
        )
    return structlog.dev.ConsoleRenderer(colors=True)


def structlog_processors(as_json: bool = True) -> list[Processor]:
    """Processors for loggers created with ``structlog.get_logger``."""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if as_json:
        processors.extend([structlog.processors.dict_tracebacks, _renderer(as_json, as_bytes=True)])
    else:
        processors.append(_renderer(as_json, as_bytes=False))
    return processors


def stdlib_logger_processors(as_json: bool = True) -> list[Processor]:
    """Processors for stdlib loggers (sqlspec, granian) routed through structlog."""
    return [
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.add_log_level,
        structlog.stdlib.ExtraAdder(),
        EventFilter(["color_message"]),
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
        _renderer(as_json, as_bytes=False),
    ]


async def after_exception_hook_handler(exc: Exception, _scope: Scope) -> None:
    """Log unexpected errors.

    Application errors are logged where they are raised, client errors are not logged.
    """
    if isinstance(exc, ApplicationError):
        return
    if isinstance(exc, HTTPException) and exc.status_code < 500:  # noqa: PLR2004
        return
    logger.error("Application exception", exc_type=type(exc).__name__, exc_info=exc)
