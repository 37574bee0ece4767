"""Watch catalog fixture management utilities."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import msgspec
import structlog

from chronoelite.lib.projection import ImageRow
from chronoelite.lib.settings import get_settings

if TYPE_CHECKING:
    from sqlspec.driver import AsyncDriverAdapterBase

logger = structlog.get_logger()

WATCH_FIXTURE_FILE = "watches.json"

# Child tables first so the truncate order also works without CASCADE
CATALOG_TABLES = ["watch_images", "watch_features", "watch_colors", "watches"]

INSERT_WATCH = """
INSERT INTO watches (
    name, category, price, original_price, rating, reviews,
    image_url, is_new, is_limited
) VALUES (
    :name, :category, :price, :original_price, :rating, :reviews,
    :image_url, :is_new, :is_limited
)
RETURNING id
"""
INSERT_COLOR = "INSERT INTO watch_colors (watch_id, color_hex) VALUES (:watch_id, :color_hex)"
INSERT_FEATURE = "INSERT INTO watch_features (watch_id, feature) VALUES (:watch_id, :feature)"
INSERT_IMAGE = """
INSERT INTO watch_images (watch_id, image_type, image_url, display_order)
VALUES (:watch_id, :image_type, :image_url, :display_order)
"""


class WatchFixture(msgspec.Struct, kw_only=True):
    """A watch with its side tables as stored in the fixture file."""

    name: str
    category: str
    price: int
    original_price: int | None = None
    rating: float = 0.0
    reviews: int = 0
    image_url: str | None = None
    is_new: bool = False
    is_limited: bool = False
    colors: list[str] = msgspec.field(default_factory=list)
    features: list[str] = msgspec.field(default_factory=list)
    images: list[ImageRow] = msgspec.field(default_factory=list)


def read_watch_fixtures(fixtures_dir: Path) -> list[WatchFixture]:
    """Read and validate the watch fixture file.

    Args:
        fixtures_dir: Directory holding ``watches.json``

    Returns:
        The watches in file order
    """
    return msgspec.json.decode((fixtures_dir / WATCH_FIXTURE_FILE).read_bytes(), type=list[WatchFixture])


async def load_watch_fixtures(
    driver: AsyncDriverAdapterBase, watches: list[WatchFixture], *, replace: bool = True
) -> dict[str, int]:
    """Insert fixture watches and their colors, features and images.

    Args:
        driver: Session to write with
        watches: Watches to insert
        replace: Empty the catalog tables first and restart their id sequences

    Returns:
        Number of rows inserted per table
    """
    if replace:
        await driver.execute(f"TRUNCATE {', '.join(CATALOG_TABLES)} RESTART IDENTITY")

    counts = dict.fromkeys(reversed(CATALOG_TABLES), 0)
    for watch in watches:
        watch_id = await driver.select_value(
            INSERT_WATCH,
            name=watch.name,
            category=watch.category,
            price=watch.price,
            original_price=watch.original_price,
            rating=watch.rating,
            reviews=watch.reviews,
            image_url=watch.image_url,
            is_new=watch.is_new,
            is_limited=watch.is_limited,
        )
        counts["watches"] += 1
        for color in watch.colors:
            await driver.execute(INSERT_COLOR, watch_id=watch_id, color_hex=color)
            counts["watch_colors"] += 1
        for feature in watch.features:
            await driver.execute(INSERT_FEATURE, watch_id=watch_id, feature=feature)
            counts["watch_features"] += 1
        for image in watch.images:
            await driver.execute(
                INSERT_IMAGE,
                watch_id=watch_id,
                image_type=image.type,
                image_url=image.url,
                display_order=image.order or 0,
            )
            counts["watch_images"] += 1

    logger.info("Loaded watch fixtures", **counts)
    return counts


async def load_fixtures(*, replace: bool = True) -> dict[str, int]:
    """Load the bundled watch catalog into the configured database.

    Args:
        replace: Empty the catalog tables first

    Returns:
        Number of rows inserted per table
    """
    from chronoelite.config import db, sqlspec

    watches = read_watch_fixtures(Path(get_settings().db.FIXTURE_PATH))
    async with sqlspec.provide_session(db) as driver:
        return await load_watch_fixtures(driver, watches, replace=replace)
