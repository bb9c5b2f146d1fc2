"""
Main entrypoint for the Product Catalog API.

This module assembles the FastAPI application, sets up logging, opens
the in‑memory product store and includes the API routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn product_catalog_api.app.main:app --reload

Interactive documentation (``/docs``, ``/redoc``, ``/openapi.json``)
is only served in the development environment.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .api.endpoints.all_products import all_products
from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .core.security import configure_transport_security
from .services.product_store import ProductStore


def describe_api(settings: Settings) -> str:
    versions = ", ".join(str(v) for v in all_products.supported_versions)
    return (
        f"Product catalog CRUD API. Supported API versions: {versions} "
        f"(default {settings.default_api_version}). Select a version with the "
        f"`{settings.api_version_query_param}` query parameter, the "
        f"`{settings.api_version_header}` header or the "
        f"`{settings.api_version_media_type_param}` media type parameter."
    )


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[ProductStore] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment‑derived
        ``settings``.
    store : Optional[ProductStore]
        Product store to serve.  When omitted a store is opened on the
        configured in‑memory database and closed on shutdown.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the store can log
    # while it is opened and seeded.
    setup_logging(settings.log_level, settings.log_file or None)

    owns_store = store is None
    if store is None:
        store = ProductStore.open(settings.database_name, seed=settings.seed_database)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            yield
        finally:
            if owns_store:
                app.state.store.close()

    docs_enabled = settings.is_development
    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description=describe_api(settings),
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    configure_transport_security(app, settings)
    app.include_router(api_router)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
