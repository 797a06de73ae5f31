"""
Catalog API - Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (fresh stores, API client,
       sample payloads).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── store: ProductStore holding the seed catalog
    ├── app: FastAPI app built around that store
    ├── test_client: HTTPX AsyncClient talking to the app in-process
    ├── product_payload: a valid product body (camelCase, as clients send it)
    └── auth_headers: a well-formed API key header
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENVIRONMENT"] = "test"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from catalog_api.main import create_app
from catalog_api.schemas.product import ProductInput
from catalog_api.services.product_store import ProductStore, seed_products


@pytest.fixture
def store():
    """A ProductStore holding the five seed products."""
    return ProductStore(seed_products())


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    How:  ASGITransport routes requests directly to the app, no server.
    raise_app_exceptions=False: unexpected errors come back as the 500
    envelope instead of being re-raised into the test.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def product_payload():
    return {
        "name": "  Desk Lamp ",
        "description": "LED desk lamp with adjustable brightness",
        "price": 3500,
        "category": " Home-Office ",
        "inStock": True,
    }


@pytest.fixture
def product_input(product_payload):
    return ProductInput.model_validate(product_payload)


@pytest.fixture
def auth_headers():
    return {"x-api-key": "api-key-abc"}
