"""
Real HTTP integration clients.

These clients communicate with the remote catalog and cart services:
- GET /products, GET /products/search?value=<q>
- GET /cart, POST /cart (bearer token)

Important:
- Must implement the same interfaces as the mock clients
- Must return data shaped according to storefront/integrations/contracts/*
"""
from .cart import HttpCartClient
from .catalog import HttpCatalogClient

__all__ = ["HttpCatalogClient", "HttpCartClient"]
