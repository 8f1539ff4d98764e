"""
Tests for application wiring: health, CORS and error fallbacks.
"""

import inspect

import pytest
from fastapi.testclient import TestClient

from dependencies import get_user_service
from main import create_app
from routers import orders, users


class ExplodingUserService:

    def list_users(self, db):
        raise RuntimeError("boom")


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestErrorFallbacks:

    def test_unhandled_error_is_generic(self, app):
        app.dependency_overrides[get_user_service] = ExplodingUserService
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.get("/api/users")

        assert response.status_code == 500
        assert response.json() == {"error": "Something went wrong!"}

    def test_malformed_json(self, client):
        response = client.post(
            "/api/users",
            content=b'{"name": "Ana", ',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request body")

    def test_non_object_body(self, client):
        response = client.post("/api/orders", json=["Widget", 3])
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid request body")

    def test_unknown_route_uses_error_shape(self, client):
        response = client.get("/api/products")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    def test_unsupported_method(self, client):
        response = client.delete("/api/users")
        assert response.status_code == 405
        assert "error" in response.json()

    def test_unhandled_error_keeps_cors_headers(self, app):
        app.dependency_overrides[get_user_service] = ExplodingUserService
        with TestClient(app) as client:
            response = client.get("/api/users", headers={"Origin": "http://shop.example"})

        assert response.status_code == 500
        assert response.json() == {"error": "Something went wrong!"}
        assert response.headers["access-control-allow-origin"] == "*"


class TestHandlers:

    @pytest.mark.parametrize("handler", [
        users.list_users, users.create_user, orders.list_orders, orders.place_order,
    ])
    def test_database_handlers_run_in_threadpool(self, handler):
        assert not inspect.iscoroutinefunction(handler)

class TestCors:

    def test_default_allows_any_origin_for_get(self, client):
        response = client.options(
            "/api/users",
            headers={
                "Origin": "http://shop.example",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_default_rejects_other_methods(self, client):
        response = client.options(
            "/api/users",
            headers={
                "Origin": "http://shop.example",
                "Access-Control-Request-Method": "DELETE",
            },
        )
        assert response.status_code == 400

    def test_default_allows_content_type_header(self, client):
        response = client.options(
            "/api/orders",
            headers={
                "Origin": "http://shop.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )
        assert response.status_code == 200

    def test_default_rejects_other_headers(self, client):
        response = client.options(
            "/api/orders",
            headers={
                "Origin": "http://shop.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "X-Api-Key",
            },
        )
        assert response.status_code == 400

    @pytest.fixture
    def open_client(self, database_url):
        app = create_app(
            database_url=database_url,
            cors_allow_methods=["*"],
            cors_allow_headers=["*"],
        )
        with TestClient(app) as client:
            yield client

    def test_unrestricted_allows_any_method_and_header(self, open_client):
        response = open_client.options(
            "/api/users",
            headers={
                "Origin": "http://shop.example",
                "Access-Control-Request-Method": "DELETE",
                "Access-Control-Request-Headers": "X-Api-Key",
            },
        )
        assert response.status_code == 200

    def test_restricted_origins(self, database_url):
        app = create_app(database_url=database_url, cors_allow_origins=["http://shop.example"])
        with TestClient(app) as client:
            allowed = client.get("/api/users", headers={"Origin": "http://shop.example"})
            other = client.get("/api/users", headers={"Origin": "http://evil.example"})

        assert allowed.headers["access-control-allow-origin"] == "http://shop.example"
        assert "access-control-allow-origin" not in other.headers
