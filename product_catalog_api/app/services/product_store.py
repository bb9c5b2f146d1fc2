"""
Persistence handle for the product catalog.

``ProductStore`` wraps one connection to the in‑memory SQLite database
and exposes the operations the route handlers need.  A single store is
created by ``create_app`` and handed to handlers through the
``get_store`` dependency, so nothing in this module keeps global
state.

Every mutating method commits before returning.  The store does not
lock: the API calls it from ``async`` handlers only, which serialises
access on the event loop.
"""

import logging
import sqlite3
from typing import Iterable, List, Optional

from ..core.db import init_db, open_database
from ..schemas.product import ProductCreate, ProductQueryParameters, ProductRead
from .product_query import PRODUCT_COLUMNS, build_product_query

logger = logging.getLogger(__name__)


class ProductNotFoundError(LookupError):
    """Raised when an operation references a product id that does not exist."""

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class ConcurrencyConflictError(RuntimeError):
    """Raised when an update affected no rows.

    The row was present when the request was validated but is gone (or
    was replaced) by the time the write happened.
    """

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Update of product {product_id} affected no rows")


class ProductStore:
    """Product repository backed by an in‑memory SQLite database."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    @classmethod
    def open(cls, database_name: str, seed: bool = True) -> "ProductStore":
        """Open (and initialise if needed) the named in‑memory database."""
        conn = open_database(database_name)
        init_db(conn, seed=seed)
        logger.info("Opened in-memory product database '%s'", database_name)
        return cls(conn)

    def close(self) -> None:
        self._conn.close()

    def list_products(self, params: ProductQueryParameters) -> List[ProductRead]:
        """Return one page of products matching ``params``.

        Raises ``UnsupportedSortKeyError`` for an unknown sort key.
        """
        query, args = build_product_query(params)
        rows = self._conn.execute(query, args).fetchall()
        return [self._row_to_product(row) for row in rows]

    def list_all(self) -> List[ProductRead]:
        rows = self._conn.execute(
            f"SELECT {PRODUCT_COLUMNS} FROM products ORDER BY id"
        ).fetchall()
        return [self._row_to_product(row) for row in rows]

    def list_available(self) -> List[ProductRead]:
        rows = self._conn.execute(
            f"SELECT {PRODUCT_COLUMNS} FROM products WHERE is_available = 1 ORDER BY id"
        ).fetchall()
        return [self._row_to_product(row) for row in rows]

    def get(self, product_id: int) -> Optional[ProductRead]:
        row = self._conn.execute(
            f"SELECT {PRODUCT_COLUMNS} FROM products WHERE id = ?",
            (product_id,),
        ).fetchone()
        if row is None:
            return None
        return self._row_to_product(row)

    def exists(self, product_id: int) -> bool:
        row = self._conn.execute(
            "SELECT 1 FROM products WHERE id = ?",
            (product_id,),
        ).fetchone()
        return row is not None

    def create(self, data: ProductCreate) -> ProductRead:
        """Insert a product and return it with its assigned id."""
        with self._conn:
            cursor = self._conn.execute(
                """
                INSERT INTO products (sku, name, description, price, is_available)
                VALUES (?, ?, ?, ?, ?)
                """,
                (data.sku, data.name, data.description, data.price, int(data.is_available)),
            )
        product_id = cursor.lastrowid
        logger.info("Created product %s (%s)", product_id, data.sku)
        # Read back so the response reflects what was stored.
        return self.get(product_id)

    def update(self, product: ProductRead) -> ProductRead:
        """Replace every field of an existing product.

        Raises ``ConcurrencyConflictError`` if no row was updated.
        """
        with self._conn:
            cursor = self._conn.execute(
                """
                UPDATE products
                SET sku = ?, name = ?, description = ?, price = ?, is_available = ?
                WHERE id = ?
                """,
                (
                    product.sku,
                    product.name,
                    product.description,
                    product.price,
                    int(product.is_available),
                    product.id,
                ),
            )
        if cursor.rowcount == 0:
            raise ConcurrencyConflictError(product.id)
        logger.info("Updated product %s", product.id)
        return product

    def delete(self, product_id: int) -> ProductRead:
        """Delete a product and return the removed record."""
        product = self.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        with self._conn:
            self._conn.execute("DELETE FROM products WHERE id = ?", (product_id,))
        logger.info("Deleted product %s", product_id)
        return product

    def delete_many(self, product_ids: Iterable[int]) -> List[ProductRead]:
        """Delete several products at once.

        Every id is looked up before anything is removed: the first
        missing id raises ``ProductNotFoundError`` and leaves the
        catalog untouched.  Duplicate ids are collapsed.
        """
        products: List[ProductRead] = []
        for product_id in dict.fromkeys(product_ids):
            product = self.get(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)
            products.append(product)

        if products:
            with self._conn:
                self._conn.executemany(
                    "DELETE FROM products WHERE id = ?",
                    [(product.id,) for product in products],
                )
            logger.info("Deleted %d products: %s", len(products), [p.id for p in products])
        return products

    @staticmethod
    def _row_to_product(row: sqlite3.Row) -> ProductRead:
        """Convert a database row to a ``ProductRead`` schema instance."""
        return ProductRead(
            id=row["id"],
            sku=row["sku"],
            name=row["name"],
            description=row["description"],
            price=row["price"],
            is_available=bool(row["is_available"]),
        )
