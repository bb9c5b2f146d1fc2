"""
Tests for the in-memory product store.
"""

import uuid
from decimal import Decimal

import pytest

from product_catalog_api.app.core.db import SEED_PRODUCTS
from product_catalog_api.app.schemas.product import ProductQueryParameters
from product_catalog_api.app.services.product_store import (
    ConcurrencyConflictError,
    ProductNotFoundError,
    ProductStore,
)


class TestDatabaseLifecycle:
    """Opening, seeding and sharing the named in-memory database."""

    def test_seeded_store_holds_sample_catalog(self):
        store = ProductStore.open(f"seed-{uuid.uuid4().hex}", seed=True)
        try:
            products = store.list_all()
        finally:
            store.close()

        assert len(products) == len(SEED_PRODUCTS)
        assert products[0].sku == SEED_PRODUCTS[0][0]

    def test_stores_with_the_same_name_share_data(self):
        name = f"shared-{uuid.uuid4().hex}"
        first = ProductStore.open(name, seed=True)
        second = ProductStore.open(name, seed=True)
        try:
            # The second open must not seed the catalog again.
            assert len(second.list_all()) == len(SEED_PRODUCTS)
            first.delete(1)
            assert second.get(1) is None
        finally:
            first.close()
            second.close()

    def test_unseeded_store_is_empty(self, store):
        assert store.list_all() == []


class TestProductStore:
    """CRUD operations."""

    def test_prices_round_trip_as_decimal(self, store, make_product):
        created = store.create(make_product(price=Decimal("19.99")))

        fetched = store.get(created.id)
        assert isinstance(fetched.price, Decimal)
        assert fetched.price == Decimal("19.99")

    def test_ids_are_not_reused(self, store, make_product):
        first = store.create(make_product(sku="ONE"))
        store.delete(first.id)
        second = store.create(make_product(sku="TWO"))

        assert second.id != first.id

    def test_list_products_runs_the_pipeline(self, store, catalog):
        params = ProductQueryParameters(max_price=Decimal("30"), sort_by="price")

        products = store.list_products(params)

        assert [p.sku for p in products] == ["AWMGSJ", "ACGLVS", "EQGYMB"]

    def test_list_available(self, store, catalog):
        assert all(p.is_available for p in store.list_available())
        assert len(store.list_available()) == 4

    def test_update_replaces_every_field(self, store, catalog):
        product = catalog[0].model_copy(
            update={"name": "Renamed", "price": Decimal("1.50"), "is_available": False}
        )

        store.update(product)

        assert store.get(product.id) == product

    def test_update_of_missing_row_is_a_conflict(self, store, catalog):
        ghost = catalog[0].model_copy(update={"id": 999})

        with pytest.raises(ConcurrencyConflictError) as excinfo:
            store.update(ghost)

        assert excinfo.value.product_id == 999

    def test_delete_missing(self, store):
        with pytest.raises(ProductNotFoundError):
            store.delete(42)

    def test_delete_many_is_all_or_nothing(self, store, catalog):
        with pytest.raises(ProductNotFoundError) as excinfo:
            store.delete_many([catalog[0].id, 999, catalog[1].id])

        assert excinfo.value.product_id == 999
        assert len(store.list_all()) == len(catalog)

    def test_delete_many_collapses_duplicates(self, store, catalog):
        deleted = store.delete_many([catalog[0].id, catalog[0].id, catalog[1].id])

        assert [p.id for p in deleted] == [catalog[0].id, catalog[1].id]
        assert len(store.list_all()) == len(catalog) - 2
