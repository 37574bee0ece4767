"""SQL statements for the watch catalog.

Every filter value is passed as a named bind parameter; only fragments chosen
from fixed tables (columns, sort orders) are assembled into the statement text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, NamedTuple

from chronoelite.schemas.watch import WatchFilters, WatchSort

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = (
    "DATABASE_TIME",
    "SAMPLE_WATCHES",
    "WATCH_DETAIL",
    "SQLQuery",
    "build_compare_query",
    "build_watch_list_query",
)

COMPARE_LIMIT = 2


class SQLQuery(NamedTuple):
    sql: str
    parameters: Mapping[str, Any]


WATCH_LIST_BASE = """
SELECT
  w.*,
  ARRAY_AGG(DISTINCT wc.color_hex) AS colors,
  ARRAY_AGG(DISTINCT wf.feature) AS features
FROM
  watches w
  LEFT JOIN watch_colors wc ON w.id = wc.watch_id
  LEFT JOIN watch_features wf ON w.id = wf.watch_id
"""

WATCH_DETAIL = """
SELECT
  w.*,
  ARRAY_AGG(DISTINCT wc.color_hex) AS colors,
  ARRAY_AGG(DISTINCT wf.feature) AS features,
  COALESCE(
    JSON_AGG(
      DISTINCT jsonb_build_object(
        'type', wi.image_type,
        'url', wi.image_url,
        'order', COALESCE(wi.display_order, 0)
      )
    ) FILTER (WHERE wi.image_url IS NOT NULL),
    '[]'
  ) AS images
FROM
  watches w
  LEFT JOIN watch_colors wc ON w.id = wc.watch_id
  LEFT JOIN watch_features wf ON w.id = wf.watch_id
  LEFT JOIN watch_images wi ON w.id = wi.watch_id
WHERE
  w.id = :watch_id
GROUP BY
  w.id
"""

DATABASE_TIME = "SELECT NOW() AS time"

SAMPLE_WATCHES = """
SELECT id, name, price
FROM watches
ORDER BY id
LIMIT :limit_count
"""

ORDER_BY: dict[WatchSort, str] = {
    WatchSort.PRICE_LOW: "w.price ASC",
    WatchSort.PRICE_HIGH: "w.price DESC",
    WatchSort.RATING: "w.rating DESC",
    WatchSort.NEWEST: "w.created_at DESC",
    WatchSort.DEFAULT: "w.id ASC",
}


def build_watch_list_query(filters: WatchFilters) -> SQLQuery:
    """Build the catalog listing statement for normalized ``filters``.

    Args:
        filters: Filters already passed through :meth:`WatchFilters.normalized`

    Returns:
        Statement text and its bind parameters
    """
    conditions: list[str] = []
    parameters: dict[str, Any] = {}

    if filters.category is not None:
        conditions.append("w.category = :category")
        parameters["category"] = filters.category
    if filters.min_price is not None:
        conditions.append("w.price >= :min_price")
        parameters["min_price"] = filters.min_price
    if filters.max_price is not None:
        conditions.append("w.price <= :max_price")
        parameters["max_price"] = filters.max_price
    if filters.search is not None:
        conditions.append("w.name ILIKE :search_pattern")
        parameters["search_pattern"] = f"%{_escape_like(filters.search)}%"

    sql = WATCH_LIST_BASE
    if conditions:
        sql += "WHERE\n  " + "\n  AND ".join(conditions) + "\n"
    # grouping collapses the color/feature join fan-out and must precede ORDER BY/LIMIT
    sql += "GROUP BY\n  w.id\n"

    order = ORDER_BY[filters.sort_by]
    if filters.sort_by is not WatchSort.DEFAULT:
        order += ", w.id ASC"
    sql += f"ORDER BY\n  {order}\n"

    if filters.limit is not None:
        sql += "LIMIT\n  :limit_count\n"
        parameters["limit_count"] = filters.limit

    return SQLQuery(sql, parameters)


def build_compare_query() -> SQLQuery:
    """The two most expensive watches."""
    return build_watch_list_query(WatchFilters(sort_by=WatchSort.PRICE_HIGH, limit=COMPARE_LIMIT))


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
