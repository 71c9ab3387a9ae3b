"""
Catalog — MOCK client.

This is an in-memory catalog for development and testing. It makes no
network calls. Search matches name or category case-insensitively and raises
NotFound when nothing matches, like the real service. Failures can be queued
with ``fail_next`` to exercise the notice and fallback paths.
"""

import logging
from typing import List, Optional, Sequence

from storefront.integrations.contracts.interfaces import CatalogClient, Product
from storefront.integrations.errors import NotFound, StorefrontError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------

SEED_PRODUCTS: List[Product] = [
    Product(
        id="v4sLtEcMpzabRyfx",
        name="iPhone XR",
        category="Phones",
        cost=100,
        rating=4,
        image_url="https://i.imgur.com/lulqWzW.jpg",
    ),
    Product(
        id="upLK9JbQ4rMhTwt4",
        name="Basketball",
        category="Sports",
        cost=100,
        rating=5,
        image_url="https://i.imgur.com/lulqWzW.jpg",
    ),
    Product(
        id="KCRwjF7lN97HnEaY",
        name="Tan Leatherette Weekender Duffle",
        category="Fashion",
        cost=150,
        rating=4,
        image_url="https://crio-directus-assets.s3.ap-south-1.amazonaws.com/ff071a1c-1099-48f9-9b03-f858ccc53832.png",
    ),
    Product(
        id="a4sLtEcMpzabRyfx",
        name="Smart Watch",
        category="Electronics",
        cost=60,
        rating=3,
        image_url="https://i.imgur.com/lulqWzW.jpg",
    ),
]


# ---------------------------------------------------------------------------
# Mock client
# ---------------------------------------------------------------------------

class MockCatalogClient(CatalogClient):
    """
    In-memory catalog.

    Parameters
    ----------
    products : sequence of Product
        Catalog contents. Defaults to SEED_PRODUCTS.
    """

    def __init__(self, products: Optional[Sequence[Product]] = None):
        self.products: List[Product] = list(SEED_PRODUCTS if products is None else products)
        self.calls: List[tuple] = []
        self._failures: List[StorefrontError] = []
        logger.info("[CATALOG MOCK] Client initialised with %d products", len(self.products))

    def fail_next(self, exc: StorefrontError) -> None:
        """Raise ``exc`` from the next call instead of answering."""
        self._failures.append(exc)

    def _maybe_fail(self) -> None:
        if self._failures:
            raise self._failures.pop(0)

    async def fetch_catalog(self) -> List[Product]:
        self.calls.append(("fetch_catalog",))
        self._maybe_fail()
        return list(self.products)

    async def search_catalog(self, query: str) -> List[Product]:
        self.calls.append(("search_catalog", query))
        self._maybe_fail()
        needle = (query or "").strip().lower()
        matches = [
            p for p in self.products
            if needle in p.name.lower() or needle in p.category.lower()
        ]
        logger.info("[CATALOG MOCK] Search %r matched %d products", query, len(matches))
        if not matches:
            raise NotFound("No products found", payload={"query": query})
        return matches
