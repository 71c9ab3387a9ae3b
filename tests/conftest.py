"""Pytest fixtures for catalog/cart engine tests."""

import pytest

from storefront.integrations.clients.mocks import MockCartClient, MockCatalogClient
from storefront.integrations.contracts.interfaces import Product, RawCartLine, SessionAuth
from storefront.orchestrator import CatalogCartOrchestrator

TOKEN = "tok-123"


@pytest.fixture
def catalog():
    return [
        Product(id="A", name="Alpha Phone", category="Phones", cost=10, rating=4, image_url="a.png"),
        Product(id="B", name="Beta Ball", category="Sports", cost=20, rating=5, image_url="b.png"),
    ]


@pytest.fixture
def catalog_client(catalog):
    return MockCatalogClient(catalog)


@pytest.fixture
def cart_client():
    return MockCartClient(carts={TOKEN: [RawCartLine(product_id="A", qty=2)]}, valid_tokens={TOKEN})


@pytest.fixture
def session():
    return SessionAuth(token=TOKEN, username="tester", balance=5000)


@pytest.fixture
def engine(catalog_client, cart_client, session):
    """Orchestrator over in-memory clients with a short debounce window."""
    return CatalogCartOrchestrator(catalog_client, cart_client, session, debounce_ms=10)


@pytest.fixture
def guest_engine(catalog_client, cart_client):
    return CatalogCartOrchestrator(catalog_client, cart_client, debounce_ms=10)
