"""Projection of joined catalog rows into response structs."""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

import msgspec

from chronoelite.schemas.watch import Watch, WatchDetail, WatchImages

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

__all__ = (
    "ProjectionMode",
    "classify_images",
    "decode_images",
    "project_row",
    "unique",
)

T = TypeVar("T")


class ProjectionMode(Enum):
    LIST = "list"
    """Scalar fields plus colors and features."""
    DETAIL = "detail"
    """List fields plus classified images."""


class ImageRow(msgspec.Struct, gc=False):
    """One ``watch_images`` entry as aggregated by the detail query."""

    type: str | None = None
    url: str | None = None
    order: int | None = None


def unique(values: Iterable[T | None] | None) -> list[T]:
    """Drop falsy entries and duplicates, keeping first appearance order."""
    if not values:
        return []
    seen: set[T] = set()
    result: list[T] = []
    for value in values:
        if not value or value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result


def decode_images(raw: str | bytes | list[Any] | None) -> list[ImageRow]:
    """Decode the aggregated image column.

    asyncpg returns ``json`` columns as text unless a codec is registered, so
    both text and already decoded lists are accepted.
    """
    if raw is None:
        return []
    if isinstance(raw, (str, bytes)):
        decoded = msgspec.json.decode(raw, type=list[ImageRow | None])
    else:
        decoded = [None if image is None else msgspec.convert(image, type=ImageRow) for image in raw]
    return [image for image in decoded if image is not None]


def _by_role(images: list[ImageRow], role: str) -> list[str]:
    matching = [image for image in images if image.type == role and image.url]
    matching.sort(key=lambda image: image.order or 0)
    return [image.url for image in matching if image.url]


def classify_images(images: list[ImageRow], fallback_url: str | None) -> WatchImages:
    """Partition images by role and derive the gallery.

    The main image is the first ``main`` image by display order, falling back to
    the watch's own ``image_url``. The gallery is main, details, then straps,
    without empty or repeated URLs.
    """
    images = [image for image in images if image.url]
    mains = _by_role(images, "main")
    main = mains[0] if mains else fallback_url
    details = _by_role(images, "detail")
    straps = _by_role(images, "strap")
    return WatchImages(
        main=main,
        details=details,
        straps=straps,
        gallery=unique([main, *details, *straps]),
    )


def _rating(value: Decimal | float | str | None) -> float:
    if value is None:
        return 0.0
    return float(value)


def project_row(row: Mapping[str, Any], mode: ProjectionMode = ProjectionMode.LIST) -> Watch | WatchDetail:
    """Convert a catalog row into its response shape.

    Args:
        row: Row from the list or detail statement
        mode: ``LIST`` for listings, ``DETAIL`` for single watch endpoints

    Returns:
        ``Watch`` in list mode, ``WatchDetail`` in detail mode
    """
    fields: dict[str, Any] = {
        "id": row["id"],
        "name": row["name"],
        "category": row["category"],
        "price": row["price"],
        "original_price": row.get("original_price"),
        "rating": _rating(row.get("rating")),
        "reviews": row.get("reviews") or 0,
        "image_url": row.get("image_url"),
        "colors": unique(row.get("colors")),
        "features": unique(row.get("features")),
        "is_new": bool(row.get("is_new")),
        "is_limited": bool(row.get("is_limited")),
        "created_at": row.get("created_at"),
    }
    if mode is ProjectionMode.LIST:
        return Watch(**fields)

    images = classify_images(decode_images(row.get("images")), fields["image_url"])
    fields["image_url"] = images.main
    return WatchDetail(**fields, images=images)
