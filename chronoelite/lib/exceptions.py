"""Application exceptions mapped to HTTP responses by the server layer."""

from __future__ import annotations

from typing import Any

__all__ = (
    "ApplicationError",
    "CatalogUnavailableError",
    "InvalidFilterError",
    "InvalidWatchIdError",
    "WatchNotFoundError",
)


class ApplicationError(Exception):
    """Base application error.

    Carries the HTTP status it should surface as, a human readable ``detail``
    and optional ``details`` for the response body.
    """

    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None, *, details: Any = None) -> None:
        self.detail = detail or self.detail
        self.details = details
        super().__init__(self.detail)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.detail}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidWatchIdError(ApplicationError):
    status_code = 400
    detail = "Watch id must be a number"


class InvalidFilterError(ApplicationError):
    status_code = 400
    detail = "Invalid query parameters"


class WatchNotFoundError(ApplicationError):
    status_code = 404
    detail = "Watch not found"


class CatalogUnavailableError(ApplicationError):
    """The database could not answer a catalog query."""

    status_code = 500
    detail = "Failed to fetch watches"
