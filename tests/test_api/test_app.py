"""
Tests for application wiring: documentation and transport security.
"""

import dataclasses

import pytest
from fastapi.testclient import TestClient

from product_catalog_api.app.main import create_app


@pytest.fixture
def production_settings(settings):
    return dataclasses.replace(settings, environment="Production")


class TestDocumentation:
    """Interactive docs are a development-only feature."""

    def test_docs_served_in_development(self, client):
        assert client.get("/docs").status_code == 200
        schema = client.get("/openapi.json")
        assert schema.status_code == 200
        assert "/allproducts" in schema.json()["paths"]
        assert "api-version" in schema.json()["info"]["description"]

    def test_docs_hidden_in_production(self, production_settings, store):
        app = create_app(settings=production_settings, store=store)
        with TestClient(app, base_url="https://testserver") as client:
            assert client.get("/docs").status_code == 404
            assert client.get("/redoc").status_code == 404
            assert client.get("/openapi.json").status_code == 404


class TestTransportSecurity:
    """HSTS and the HTTPS redirect outside development."""

    def test_hsts_header_in_production(self, production_settings, store):
        app = create_app(settings=production_settings, store=store)
        with TestClient(app, base_url="https://testserver") as client:
            response = client.get("/products")

        assert response.status_code == 200
        assert response.headers["Strict-Transport-Security"] == "max-age=31536000"

    def test_http_is_redirected_to_https_in_production(self, production_settings, store):
        app = create_app(settings=production_settings, store=store)
        with TestClient(app) as client:
            response = client.get("/products", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "https://testserver/products"

    def test_redirect_can_be_disabled(self, production_settings, store):
        settings = dataclasses.replace(production_settings, https_redirect=False)
        app = create_app(settings=settings, store=store)
        with TestClient(app) as client:
            response = client.get("/products", follow_redirects=False)

        assert response.status_code == 200
        assert "Strict-Transport-Security" not in response.headers

    def test_no_hsts_in_development(self, client):
        response = client.get("/products")

        assert "Strict-Transport-Security" not in response.headers
