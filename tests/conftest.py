"""
Pytest configuration and fixtures for testing.

Every test gets its own uniquely named in‑memory database, so tests
never see each other's products.
"""

import uuid
from decimal import Decimal
from typing import Generator, List

import pytest
from fastapi.testclient import TestClient

from product_catalog_api.app.core.config import Settings
from product_catalog_api.app.main import create_app
from product_catalog_api.app.schemas.product import ProductCreate, ProductRead
from product_catalog_api.app.services.product_store import ProductStore


def build_product(**overrides) -> ProductCreate:
    """Build a ``ProductCreate`` with sensible defaults."""
    data = {
        "sku": "TST001",
        "name": "Test Product",
        "description": "A product used in tests.",
        "price": Decimal("10.00"),
        "is_available": True,
    }
    data.update(overrides)
    return ProductCreate(**data)


@pytest.fixture
def make_product():
    return build_product


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="Development",
        database_name=f"test-{uuid.uuid4().hex}",
        seed_database=False,
    )


@pytest.fixture
def store(settings: Settings) -> Generator[ProductStore, None, None]:
    store = ProductStore.open(settings.database_name, seed=False)
    yield store
    store.close()


@pytest.fixture
def client(settings: Settings, store: ProductStore) -> Generator[TestClient, None, None]:
    """Create a test client for an app serving the test store."""
    app = create_app(settings=settings, store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def catalog(store: ProductStore) -> List[ProductRead]:
    """A small catalog with known prices, names and availability."""
    rows = [
        ("AWMGSJ", "Men's Gym Shorts", "9.99", True),
        ("AWWLEG", "Women's Leggings", "44.99", True),
        ("FTRUNR", "Trail Running Shoes", "119.99", False),
        ("EQYOGA", "Yoga Mat", "39.99", True),
        ("EQGYMB", "Gym Ball", "25.00", False),
        ("ACGLVS", "Lifting Gloves", "21.99", True),
    ]
    return [
        store.create(build_product(sku=sku, name=name, price=Decimal(price), is_available=available))
        for sku, name, price, available in rows
    ]


@pytest.fixture
def large_catalog(store: ProductStore) -> List[ProductRead]:
    """Thirty products priced 1.00 to 30.00, every third one unavailable."""
    return [
        store.create(
            build_product(
                sku=f"BULK{i:03d}",
                name=f"Bulk Product {i}",
                price=Decimal(i),
                is_available=i % 3 != 0,
            )
        )
        for i in range(1, 31)
    ]
