"""
Filter, sort and pagination pipeline for product listings.

``build_product_query`` turns a ``ProductQueryParameters`` descriptor
into a parameterised SELECT.  Filters are applied in a fixed order and
combined with AND:

1. price range (inclusive bounds)
2. free‑text search over SKU and name (case‑insensitive substring)
3. exact SKU match
4. name substring match (case‑insensitive)

followed by sorting and ``LIMIT``/``OFFSET`` pagination.  Sorting is
restricted to the keys listed in ``SORT_KEYS``; anything else raises
``UnsupportedSortKeyError``.
"""

from typing import Any, List, Tuple

from ..schemas.product import ProductQueryParameters

PRODUCT_COLUMNS = "id, sku, name, description, price, is_available"

# Allowed sort keys (lower‑cased) mapped to the column they order by.
SORT_KEYS = {
    "id": "id",
    "sku": "sku",
    "name": "name",
    "description": "description",
    "price": "price",
    "is_available": "is_available",
    "isavailable": "is_available",
}


class UnsupportedSortKeyError(ValueError):
    """Raised when a listing is requested with an unknown sort key."""

    def __init__(self, sort_by: str) -> None:
        self.sort_by = sort_by
        allowed = ", ".join(sorted(k for k in SORT_KEYS if k != "isavailable"))
        super().__init__(f"Cannot sort by '{sort_by}'. Allowed sort keys: {allowed}")


def resolve_sort_column(sort_by: str) -> str:
    """Map a sort key to its column, case‑insensitively."""
    column = SORT_KEYS.get(sort_by.strip().lower())
    if column is None:
        raise UnsupportedSortKeyError(sort_by)
    return column


def build_product_query(params: ProductQueryParameters) -> Tuple[str, List[Any]]:
    """Build the SQL statement and arguments for a product listing."""
    where_clauses: List[str] = []
    args: List[Any] = []

    if params.min_price is not None:
        where_clauses.append("price >= ?")
        args.append(params.min_price)
    if params.max_price is not None:
        where_clauses.append("price <= ?")
        args.append(params.max_price)
    if params.search_term:
        term = params.search_term.lower()
        where_clauses.append("(instr(lower(sku), ?) > 0 OR instr(lower(name), ?) > 0)")
        args.extend([term, term])
    if params.sku:
        where_clauses.append("sku = ?")
        args.append(params.sku)
    if params.name:
        where_clauses.append("instr(lower(name), ?) > 0")
        args.append(params.name.lower())

    query = f"SELECT {PRODUCT_COLUMNS} FROM products"
    if where_clauses:
        query += " WHERE " + " AND ".join(where_clauses)

    column = resolve_sort_column(params.sort_by)
    direction = "DESC" if params.sort_order == "desc" else "ASC"
    query += f" ORDER BY {column} {direction}"
    # Keep pages stable when the sort column has duplicates.
    if column != "id":
        query += ", id ASC"

    query += " LIMIT ? OFFSET ?"
    args.extend([params.size, params.offset])
    return query, args
