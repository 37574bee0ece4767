"""Base class for services that run statements on a sqlspec driver."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlspec.driver import AsyncDriverAdapterBase


class SQLSpecService:
    """Holds the driver of the session the service was created for."""

    __slots__ = ("driver",)

    def __init__(self, driver: AsyncDriverAdapterBase) -> None:
        self.driver = driver
