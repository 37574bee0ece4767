"""Health and diagnostics schemas."""

from datetime import datetime

from chronoelite.schemas.base import BaseStruct

__all__ = (
    "HealthStatus",
    "SampleResponse",
    "SampleWatch",
)


class HealthStatus(BaseStruct):
    """Healthy response of the health probe."""

    status: str
    timestamp: datetime
    database_time: datetime


class SampleWatch(BaseStruct):
    id: int
    name: str
    price: int


class SampleResponse(BaseStruct):
    """Response of the database smoke test route."""

    success: bool
    count: int
    watches: list[SampleWatch]
