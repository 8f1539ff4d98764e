"""Shared fixtures for the orders API tests."""
import pytest
from fastapi.testclient import TestClient

from main import create_app


@pytest.fixture
def database_url(tmp_path):
    """SQLite file private to one test."""
    return f"sqlite:///{tmp_path / 'db' / 'test.sqlite'}"


@pytest.fixture
def app(database_url):
    return create_app(database_url=database_url)


@pytest.fixture
def client(app):
    """Client with the app lifespan (schema setup) running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def order_payload():
    return {
        "product": "Widget",
        "last_name": "Pop",
        "first_name": "Ion",
        "email": "ion@x.com",
        "phone": "0700",
        "address": "Str. 1",
        "quantity": 3,
    }
