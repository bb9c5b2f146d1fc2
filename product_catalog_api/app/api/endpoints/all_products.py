"""
Versioned ``/allproducts`` endpoint.

Version 1.0 returns the whole catalog; version 2.0 returns only the
products that are available.  The route table below maps each API
version to its handler and the route picks one per request.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ...core.config import Settings
from ...schemas.product import ProductRead
from ...services.product_store import ProductStore
from ..deps import get_settings, get_store
from ..versioning import ApiVersion, ApiVersionError, VersionedEndpoint

router = APIRouter()

all_products = VersionedEndpoint()


@all_products.map_to(ApiVersion(1, 0))
def all_products_v1(store: ProductStore) -> List[ProductRead]:
    return store.list_all()


@all_products.map_to(ApiVersion(2, 0))
def all_products_v2(store: ProductStore) -> List[ProductRead]:
    return store.list_available()


@router.get("/allproducts", response_model=List[ProductRead])
async def list_all_products(
    request: Request,
    response: Response,
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> List[ProductRead]:
    """Return the catalog as seen by the requested API version."""
    try:
        handler = all_products.select(request, settings)
    except ApiVersionError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": exc.code, "message": str(exc)},
            headers=all_products.report_headers(),
        ) from exc
    response.headers.update(all_products.report_headers())
    return handler(store)
