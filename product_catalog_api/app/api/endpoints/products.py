"""
Product endpoints.

These routes expose the CRUD API for the catalog.  They are
unversioned and answer every API version.  Order matters here:
``/available`` must be declared before ``/{product_id}`` or it would be
parsed as an id.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from ...schemas.product import ProductCreate, ProductQueryParameters, ProductRead
from ...services.product_query import UnsupportedSortKeyError
from ...services.product_store import (
    ConcurrencyConflictError,
    ProductNotFoundError,
    ProductStore,
)
from ..deps import get_product_query_parameters, get_store

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = "Product not found"


@router.get("", response_model=List[ProductRead])
async def list_products(
    params: ProductQueryParameters = Depends(get_product_query_parameters),
    store: ProductStore = Depends(get_store),
) -> List[ProductRead]:
    """List products with filters, sorting and pagination.

    - **min_price**, **max_price**: inclusive price range.
    - **search_term**: substring of the SKU or name, case‑insensitive.
    - **sku**: exact SKU.
    - **name**: substring of the name, case‑insensitive.
    - **sort_by**, **sort_order**: sort key and direction (`asc`/`desc`).
    - **page**, **size**: 1‑based page number and page size.
    """
    try:
        return store.list_products(params)
    except UnsupportedSortKeyError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/available", response_model=List[ProductRead])
async def list_available_products(store: ProductStore = Depends(get_store)) -> List[ProductRead]:
    """Return every product currently marked as available."""
    return store.list_available()


@router.get("/{product_id}", response_model=ProductRead, name="get_product")
async def get_product(product_id: int, store: ProductStore = Depends(get_store)) -> ProductRead:
    product = store.get(product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return product


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    product_in: ProductCreate,
    request: Request,
    response: Response,
    store: ProductStore = Depends(get_store),
) -> ProductRead:
    """Create a product.

    The store assigns the id.  The ``Location`` header points at the
    new resource.
    """
    product = store.create(product_in)
    response.headers["Location"] = str(request.url_for("get_product", product_id=product.id))
    return product


@router.post("/Delete", response_model=List[ProductRead])
async def delete_products(
    ids: List[int] = Query([], description="Ids of the products to delete"),
    store: ProductStore = Depends(get_store),
) -> List[ProductRead]:
    """Delete several products and return them.

    If any id is unknown the request fails with 404 and nothing is
    deleted.
    """
    try:
        return store.delete_many(ids)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc


@router.put("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_product(
    product_id: int,
    product: ProductRead,
    store: ProductStore = Depends(get_store),
) -> None:
    """Replace a product.  The id in the body must match the URL."""
    if product.id != product_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Product id in the body does not match the id in the URL",
        )
    try:
        store.update(product)
    except ConcurrencyConflictError:
        logger.warning("Update conflict on product %s", product_id)
        if not store.exists(product_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
        raise
    return None


@router.delete("/{product_id}", response_model=ProductRead)
async def delete_product(product_id: int, store: ProductStore = Depends(get_store)) -> ProductRead:
    """Delete a product and return the removed record."""
    try:
        return store.delete(product_id)
    except ProductNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND) from exc
