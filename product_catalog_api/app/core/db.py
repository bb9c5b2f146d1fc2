"""
In‑memory SQLite database integration.

This module opens the catalog database (``open_database``) and
creates the schema and sample data on application start
(``init_db``).  The database lives entirely in memory: it is a named
shared‑cache SQLite database, so every connection opened with the
same name inside one process sees the same rows, and the data is
discarded once the last connection closes.

Prices are stored in a ``DECIMAL`` column.  The adapter and converter
registered below make them round‑trip as ``decimal.Decimal`` instead
of ``float``.
"""

import logging
import sqlite3
from decimal import Decimal
from urllib.parse import quote

logger = logging.getLogger(__name__)

sqlite3.register_adapter(Decimal, str)
sqlite3.register_converter("DECIMAL", lambda raw: Decimal(raw.decode("ascii")))


SCHEMA = """
CREATE TABLE IF NOT EXISTS products (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    sku TEXT NOT NULL,
    name TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    price DECIMAL(18, 2) NOT NULL,
    is_available INTEGER NOT NULL DEFAULT 0
);
"""

# Sample catalog loaded into a fresh database when seeding is enabled.
SEED_PRODUCTS = [
    ("AWMGSJ", "Men's Gym Shorts", "Lightweight shorts with a mesh liner.", "29.99", True),
    ("AWMCTP", "Men's Compression Top", "Long sleeve top for high intensity workouts.", "34.99", True),
    ("AWMPHR", "Men's Running Pants", "Tapered running pants with zip pockets.", "54.99", False),
    ("AWWLEG", "Women's Leggings", "High waist leggings with a hidden pocket.", "44.99", True),
    ("AWWTNK", "Women's Tank Top", "Breathable racerback tank top.", "19.99", True),
    ("AWWJKT", "Women's Windbreaker", "Packable water resistant jacket.", "79.99", False),
    ("FTRUNR", "Trail Running Shoes", "Grippy outsole for loose terrain.", "119.99", True),
    ("FTROAD", "Road Running Shoes", "Cushioned shoes for long distances.", "109.99", True),
    ("FTSLID", "Recovery Slides", "Soft foam slides for after training.", "24.99", False),
    ("EQYOGA", "Yoga Mat", "Non-slip mat, 6 mm thick.", "39.99", True),
    ("EQKBEL", "Kettlebell 12 kg", "Cast iron kettlebell with a flat base.", "49.99", True),
    ("EQROPE", "Speed Jump Rope", "Adjustable cable rope with ball bearings.", "14.99", True),
    ("EQFOAM", "Foam Roller", "High density roller for muscle recovery.", "27.50", False),
    ("NUPROT", "Whey Protein 1 kg", "Vanilla flavoured whey protein powder.", "39.00", True),
    ("NUBARS", "Protein Bars (12 pack)", "Chocolate peanut protein bars.", "24.00", True),
    ("NUELEC", "Electrolyte Tablets", "Sugar free hydration tablets.", "9.99", False),
    ("ACBOTL", "Insulated Water Bottle", "Keeps drinks cold for 24 hours.", "29.00", True),
    ("ACBAGS", "Gym Duffel Bag", "Duffel bag with a separate shoe compartment.", "64.99", True),
    ("ACHDBN", "Sweat Headband", "Moisture wicking headband.", "7.99", True),
    ("ACGLVS", "Lifting Gloves", "Padded gloves with wrist support.", "21.99", False),
]


def database_uri(name: str) -> str:
    """Build the SQLite URI of the named shared in‑memory database."""
    return f"file:{quote(name)}?mode=memory&cache=shared"


def open_database(name: str) -> sqlite3.Connection:
    """Open a connection to the named in‑memory database.

    The connection may be used from any thread; callers are expected to
    serialise access (the API only touches it from the event loop).
    Rows are returned as ``sqlite3.Row`` objects keyed by column name.
    """
    conn = sqlite3.connect(
        database_uri(name),
        uri=True,
        detect_types=sqlite3.PARSE_DECLTYPES,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection, seed: bool = True) -> None:
    """Create the schema and optionally load the sample catalog.

    Seeding only happens when the ``products`` table is empty, so
    opening a second store against an existing database does not
    duplicate rows.
    """
    conn.executescript(SCHEMA)
    if seed:
        count = conn.execute("SELECT COUNT(*) FROM products").fetchone()[0]
        if count == 0:
            conn.executemany(
                """
                INSERT INTO products (sku, name, description, price, is_available)
                VALUES (?, ?, ?, ?, ?)
                """,
                [
                    (sku, name, description, Decimal(price), int(available))
                    for sku, name, description, price, available in SEED_PRODUCTS
                ],
            )
            logger.info("Seeded %d sample products", len(SEED_PRODUCTS))
    conn.commit()
