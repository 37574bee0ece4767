from __future__ import annotations

import pytest

from chronoelite.db.queries import build_compare_query, build_watch_list_query
from chronoelite.schemas import WatchFilters, WatchSort


def test_no_filters_lists_everything_by_id() -> None:
    query = build_watch_list_query(WatchFilters())

    assert "WHERE" not in query.sql
    assert "LIMIT" not in query.sql
    assert "ORDER BY\n  w.id ASC\n" in query.sql
    assert dict(query.parameters) == {}


def test_filters_are_bound_not_interpolated() -> None:
    filters = WatchFilters(
        category="Premium",
        min_price=30000,
        max_price=50000,
        search="gold",
        sort_by=WatchSort.PRICE_HIGH,
        limit=1,
    )

    query = build_watch_list_query(filters)

    assert dict(query.parameters) == {
        "category": "Premium",
        "min_price": 30000,
        "max_price": 50000,
        "search_pattern": "%gold%",
        "limit_count": 1,
    }
    for value in ("Premium", "30000", "50000", "gold"):
        assert value not in query.sql
    assert (
        "w.category = :category\n  AND w.price >= :min_price\n  AND w.price <= :max_price\n"
        "  AND w.name ILIKE :search_pattern" in query.sql
    )


def test_group_by_precedes_order_and_limit() -> None:
    query = build_watch_list_query(WatchFilters(category="Premium", sort_by=WatchSort.RATING, limit=5))

    where = query.sql.index("WHERE")
    group = query.sql.index("GROUP BY")
    order = query.sql.index("ORDER BY")
    limit = query.sql.index("LIMIT")
    assert where < group < order < limit
    assert ":limit_count" in query.sql


@pytest.mark.parametrize(
    ("sort_by", "expected"),
    [
        (WatchSort.PRICE_LOW, "w.price ASC, w.id ASC"),
        (WatchSort.PRICE_HIGH, "w.price DESC, w.id ASC"),
        (WatchSort.RATING, "w.rating DESC, w.id ASC"),
        (WatchSort.NEWEST, "w.created_at DESC, w.id ASC"),
        (WatchSort.DEFAULT, "w.id ASC"),
    ],
)
def test_sort_orders(sort_by: WatchSort, expected: str) -> None:
    query = build_watch_list_query(WatchFilters(sort_by=sort_by))

    assert f"ORDER BY\n  {expected}\n" in query.sql


def test_search_wildcards_are_escaped() -> None:
    query = build_watch_list_query(WatchFilters(search="50%_off"))

    assert query.parameters["search_pattern"] == "%50\\%\\_off%"


def test_zero_price_bounds_are_kept() -> None:
    query = build_watch_list_query(WatchFilters(min_price=0, max_price=0))

    assert query.parameters["min_price"] == 0
    assert query.parameters["max_price"] == 0


def test_compare_query_takes_two_most_expensive() -> None:
    query = build_compare_query()

    assert "ORDER BY\n  w.price DESC, w.id ASC\n" in query.sql
    assert dict(query.parameters) == {"limit_count": 2}
