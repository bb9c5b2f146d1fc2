"""
Top‑level API router.

Aggregates the endpoint routers.  Product CRUD routes live under
``/products``; ``/allproducts`` is the versioned catalog endpoint and
declares its own path.
"""

from fastapi import APIRouter

from .endpoints import all_products, products

router = APIRouter()

router.include_router(products.router, prefix="/products", tags=["products"])
router.include_router(all_products.router, tags=["products"])
