"""
Mock integration clients.

These clients return realistic responses without calling any external API.
They are used when:
- the catalog/cart service is not reachable during development
- we want to drive the orchestrator end-to-end in tests

Important:
- Mock clients must follow the SAME interface as real HTTP clients.
- Mock clients return data shaped according to storefront/integrations/contracts/*
"""
from .cart import MockCartClient
from .catalog import SEED_PRODUCTS, MockCatalogClient

__all__ = ["MockCatalogClient", "MockCartClient", "SEED_PRODUCTS"]
