"""
Catalog HTTP Client.

Purpose:
- Fetches the full product catalog (GET /products)
- Fetches the filtered catalog for a search query (GET /products/search?value=<q>);
  a 404 means no matches and is raised as NotFound
- Validates product bodies into Product contracts

Usage:
- Wired by CatalogCartOrchestrator through the CatalogClient interface

Important:
- This client is the ONLY place that talks to the catalog service.
"""

from __future__ import annotations

import logging
from typing import List

from storefront.integrations.clients.real_http.base import BaseHttpClient
from storefront.integrations.contracts.interfaces import CatalogClient, Product
from storefront.integrations.errors import CatalogFetchError, MalformedResponse, NotFound
from storefront.integrations.policy.response_wrappers import extract_error_message, normalize_products

logger = logging.getLogger(__name__)


class HttpCatalogClient(BaseHttpClient, CatalogClient):
    products_path = "/products"
    search_path = "/products/search"

    async def fetch_catalog(self) -> List[Product]:
        result = await self._request("GET", self.products_path, CatalogFetchError)
        self._raise_for_status(result, self.products_path, CatalogFetchError)
        return self._products(result.body)

    async def search_catalog(self, query: str) -> List[Product]:
        result = await self._request("GET", self.search_path, CatalogFetchError, params={"value": query})
        if result.status_code == 404:
            logger.info("No products match search %r", query)
            message = extract_error_message(result.body, default="No products found")
            raise NotFound(message, payload={"query": query})
        self._raise_for_status(result, self.search_path, CatalogFetchError)
        return self._products(result.body)

    def _products(self, body) -> List[Product]:
        try:
            products = normalize_products(body)
        except MalformedResponse as exc:
            raise self._malformed(exc, CatalogFetchError) from exc
        logger.debug("Received %d products", len(products))
        return products
