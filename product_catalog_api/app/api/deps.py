"""
FastAPI dependencies shared by the route handlers.

The settings and the product store are created once by ``create_app``
and attached to ``app.state``; these helpers hand them to handlers so
no handler reaches for module‑level globals.
"""

from decimal import Decimal
from typing import Optional

from fastapi import Depends, Query, Request

from ..core.config import Settings
from ..schemas.product import ProductQueryParameters
from ..services.product_store import ProductStore


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def get_product_query_parameters(
    min_price: Optional[Decimal] = Query(None, description="Inclusive lower price bound"),
    max_price: Optional[Decimal] = Query(None, description="Inclusive upper price bound"),
    search_term: Optional[str] = Query(None, description="Case-insensitive substring of SKU or name"),
    sku: Optional[str] = Query(None, description="Exact SKU"),
    name: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
    sort_by: str = Query("id", description="id, sku, name, description, price or is_available"),
    sort_order: str = Query("asc", description="asc or desc; anything else means asc"),
    page: int = Query(1, ge=1),
    size: Optional[int] = Query(None, gt=0, description="Page size; clamped to the configured maximum"),
    settings: Settings = Depends(get_settings),
) -> ProductQueryParameters:
    """Parse the listing query string into a ``ProductQueryParameters``."""
    if size is None:
        size = settings.default_page_size
    return ProductQueryParameters(
        min_price=min_price,
        max_price=max_price,
        search_term=search_term,
        sku=sku,
        name=name,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        size=min(size, settings.max_page_size),
    )
