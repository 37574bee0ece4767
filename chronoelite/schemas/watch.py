"""Watch catalog schemas."""

from __future__ import annotations

import json
from datetime import datetime
from enum import StrEnum

from chronoelite.schemas.base import BaseStruct

__all__ = (
    "Watch",
    "WatchDetail",
    "WatchFilters",
    "WatchImages",
    "WatchSort",
)


class WatchSort(StrEnum):
    """Sort orders accepted by the catalog listing."""

    PRICE_LOW = "price-low"
    PRICE_HIGH = "price-high"
    RATING = "rating"
    NEWEST = "newest"
    DEFAULT = "default"

    @classmethod
    def parse(cls, value: str | None) -> WatchSort:
        """Map a raw ``sortBy`` value to a sort order; unknown values sort by id."""
        try:
            return cls(value)
        except ValueError:
            return cls.DEFAULT


class Watch(BaseStruct, kw_only=True):
    """A catalog watch as returned by listing endpoints.

    Prices are in cents.
    """

    id: int
    name: str
    category: str
    price: int
    original_price: int | None
    rating: float
    reviews: int
    image_url: str | None
    colors: list[str]
    features: list[str]
    is_new: bool
    is_limited: bool
    created_at: datetime | None


class WatchImages(BaseStruct, kw_only=True):
    main: str | None
    details: list[str]
    straps: list[str]
    gallery: list[str]


class WatchDetail(Watch, kw_only=True):
    """A watch with its classified images, returned by single item endpoints."""

    images: WatchImages


class WatchFilters(BaseStruct, kw_only=True, omit_defaults=True):
    """Filters for the catalog listing.

    Build instances from request values and call :meth:`normalized` before use,
    both the query builder and the cache key expect normalized filters.
    """

    category: str | None = None
    min_price: int | None = None
    max_price: int | None = None
    search: str | None = None
    sort_by: WatchSort = WatchSort.DEFAULT
    limit: int | None = None

    def normalized(self, all_categories: str) -> WatchFilters:
        """Return a copy with empty strings and the "all categories" value dropped."""
        category = self.category or None
        if category == all_categories:
            category = None
        return WatchFilters(
            category=category,
            min_price=self.min_price,
            max_price=self.max_price,
            search=self.search or None,
            sort_by=self.sort_by,
            limit=self.limit,
        )

    def cache_key(self) -> str:
        """Canonical key: parameter order in the request does not matter."""
        params = {name: value for name, value in self.to_dict().items() if value is not None}
        params["sort_by"] = str(self.sort_by)
        return f"watches:{json.dumps(params, sort_keys=True, separators=(',', ':'))}"
