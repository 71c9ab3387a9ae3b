"""
Cart — MOCK client.

Keeps one cart per bearer token in memory and answers mutations with the
full cart, like the real service. A quantity of zero removes the line. Tokens
not listed in ``valid_tokens`` are rejected with Unauthorized when
``valid_tokens`` is given.
"""

import logging
from typing import Dict, Iterable, List, Optional

from storefront.cart.guards import check_mutation
from storefront.integrations.contracts.interfaces import CartClient, RawCartLine, SessionAuth
from storefront.integrations.errors import (
    CartFetchError,
    CartMutationError,
    StorefrontError,
    Unauthorized,
    classify,
)

logger = logging.getLogger(__name__)


class MockCartClient(CartClient):
    def __init__(
        self,
        carts: Optional[Dict[str, List[RawCartLine]]] = None,
        valid_tokens: Optional[Iterable[str]] = None,
    ):
        self.carts: Dict[str, List[RawCartLine]] = {k: list(v) for k, v in (carts or {}).items()}
        self.valid_tokens = set(valid_tokens) if valid_tokens is not None else None
        self.calls: List[tuple] = []
        self._failures: List[StorefrontError] = []

    def fail_next(self, exc: StorefrontError) -> None:
        """Raise ``exc`` from the next network-bound call instead of answering."""
        self._failures.append(exc)

    def _maybe_fail(self) -> None:
        if self._failures:
            raise self._failures.pop(0)

    def _authorize(self, session: SessionAuth, operation) -> str:
        token = session.token or ""
        if self.valid_tokens is not None and token not in self.valid_tokens:
            raise classify(Unauthorized, operation)(
                "Protected route, Oauth2 Bearer token not found", status_code=401
            )
        return token

    async def fetch_cart(self, session: SessionAuth) -> Optional[List[RawCartLine]]:
        if not session.is_authenticated:
            return None
        self.calls.append(("fetch_cart", session.token))
        self._maybe_fail()
        token = self._authorize(session, CartFetchError)
        return list(self.carts.get(token, []))

    async def mutate_cart(self, session: SessionAuth, product_id: str, qty: int) -> List[RawCartLine]:
        check_mutation(session, product_id, qty)
        self.calls.append(("mutate_cart", session.token, product_id, qty))
        self._maybe_fail()
        token = self._authorize(session, CartMutationError)

        lines = self.carts.setdefault(token, [])
        for i, line in enumerate(lines):
            if line.product_id == product_id:
                if qty == 0:
                    del lines[i]
                else:
                    lines[i] = RawCartLine(product_id=product_id, qty=qty)
                break
        else:
            if qty > 0:
                lines.append(RawCartLine(product_id=product_id, qty=qty))
        logger.info("[CART MOCK] %s -> qty %s (%d lines)", product_id, qty, len(lines))
        return list(lines)
