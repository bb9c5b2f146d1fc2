"""
Transport security for production deployments.

Outside development the API answers every HTTPS request with a
``Strict-Transport-Security`` header and, unless disabled, redirects
plain HTTP requests to HTTPS.  In development neither is applied so the
API can be exercised over ``http://localhost``.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.httpsredirect import HTTPSRedirectMiddleware

from .config import Settings

SECONDS_PER_DAY = 24 * 60 * 60


def hsts_header_value(max_age_days: int) -> str:
    return f"max-age={max_age_days * SECONDS_PER_DAY}"


def configure_transport_security(app: FastAPI, settings: Settings) -> None:
    """Install HSTS and the HTTPS redirect on ``app`` when not in development."""
    if settings.is_development:
        return

    hsts_value = hsts_header_value(settings.hsts_max_age_days)

    @app.middleware("http")
    async def add_hsts_header(request: Request, call_next):
        response = await call_next(request)
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = hsts_value
        return response

    if settings.https_redirect:
        app.add_middleware(HTTPSRedirectMiddleware)
