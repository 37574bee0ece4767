from __future__ import annotations

import os
from typing import TYPE_CHECKING

import asyncpg
import pytest
from litestar.testing import AsyncTestClient

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from litestar import Litestar

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL")

pytestmark = pytest.mark.integration

SEED_SQL = """
TRUNCATE watch_images, watch_features, watch_colors, watches RESTART IDENTITY CASCADE;

INSERT INTO watches (name, category, price, original_price, rating, reviews, image_url, is_new, is_limited, created_at)
VALUES
    ('ChronoElite Classic', 'Clássico', 24900, 29900, 4.9, 128, '/assets/watch-hero.png', TRUE, FALSE, '2024-01-10'),
    ('ChronoElite Gold', 'Premium', 48900, NULL, 5.0, 64, '/assets/watch-model3.png', FALSE, TRUE, '2024-03-01'),
    ('ChronoElite Sport', 'Esportivo', 32900, NULL, 4.7, 45, '/assets/watch-sport.png', TRUE, FALSE, '2024-05-20'),
    ('ChronoElite 100%_Steel', 'Premium', 39900, 44900, 4.8, 32, '/assets/watch-steel.png', FALSE, FALSE, '2023-11-02');

INSERT INTO watch_colors (watch_id, color_hex)
VALUES (1, '#0F172A'), (1, '#92400E'), (2, '#B45309'), (4, '#0F172A');

INSERT INTO watch_features (watch_id, feature)
VALUES (1, 'Automático'), (1, 'Cristal Safira'), (2, 'Ouro 18K'), (4, 'Cerâmica');

INSERT INTO watch_images (watch_id, image_type, image_url, display_order)
VALUES
    (1, 'main', '/assets/watch-hero.png', 0),
    (1, 'detail', '/assets/dial.png', 0),
    (1, 'detail', '/assets/watch-hero.png', 1),
    (1, 'strap', '/assets/strap-b.png', 2),
    (1, 'strap', '/assets/strap-a.png', 1);
"""


def _migration_up() -> str:
    from chronoelite.lib.settings import get_settings

    path = f"{get_settings().db.MIGRATION_PATH}/0001_watch_catalog.sql"
    with open(path, encoding="utf-8") as f:  # noqa: PTH123
        script = f.read()
    return script.split("-- name: migrate-0001-down")[0]


@pytest.fixture
async def seeded_database() -> None:
    """Create the catalog tables and load a known set of watches."""
    if not TEST_DATABASE_URL:
        pytest.skip("TEST_DATABASE_URL is not set")
    connection = await asyncpg.connect(TEST_DATABASE_URL)
    try:
        await connection.execute(_migration_up())
        await connection.execute(SEED_SQL)
    finally:
        await connection.close()


@pytest.fixture
def app(seeded_database: None, monkeypatch: pytest.MonkeyPatch) -> Litestar:
    """Create test app instance."""
    from chronoelite import config
    from chronoelite.server.asgi import create_app

    # each app closes its pool on shutdown; start the next one from scratch
    monkeypatch.setattr(config.db, "pool_instance", None)
    return create_app()


@pytest.fixture
async def client(app: Litestar) -> AsyncGenerator[AsyncTestClient, None]:
    """Create test client."""
    async with AsyncTestClient(app=app) as c:
        yield c
