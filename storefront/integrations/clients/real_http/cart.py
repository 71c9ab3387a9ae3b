"""
Cart HTTP Client.

Purpose:
- Fetches the visitor's persisted cart (GET /cart)
- Upserts a single cart line (POST /cart {productId, qty}); the service answers
  with the full, authoritative cart

Implementation notes:
- Forwards SessionAuth.token as an "Authorization: Bearer" header
- Guests (no token) never reach the network: fetch_cart returns None and
  mutate_cart raises PreconditionRejected
- A qty of 0 removes the line on the service side
- 401/403 are classified as Unauthorized, other non-2xx as ServerError
"""

from __future__ import annotations

import logging
from typing import List, Optional

from storefront.cart.guards import check_mutation
from storefront.integrations.clients.real_http.base import BaseHttpClient
from storefront.integrations.contracts.interfaces import CartClient, RawCartLine, SessionAuth
from storefront.integrations.errors import CartFetchError, CartMutationError, MalformedResponse
from storefront.integrations.policy.response_wrappers import normalize_cart_lines

logger = logging.getLogger(__name__)


class HttpCartClient(BaseHttpClient, CartClient):
    cart_path = "/cart"

    async def fetch_cart(self, session: SessionAuth) -> Optional[List[RawCartLine]]:
        if not session.is_authenticated:
            logger.debug("Guest session; skipping cart fetch")
            return None
        result = await self._request("GET", self.cart_path, CartFetchError, token=session.token)
        self._raise_for_status(result, self.cart_path, CartFetchError)
        return self._lines(result.body, CartFetchError)

    async def mutate_cart(self, session: SessionAuth, product_id: str, qty: int) -> List[RawCartLine]:
        check_mutation(session, product_id, qty)
        payload = RawCartLine(product_id=product_id, qty=qty).to_payload()
        result = await self._request("POST", self.cart_path, CartMutationError, json=payload, token=session.token)
        self._raise_for_status(result, self.cart_path, CartMutationError)
        return self._lines(result.body, CartMutationError)

    def _lines(self, body, operation) -> List[RawCartLine]:
        try:
            return normalize_cart_lines(body)
        except MalformedResponse as exc:
            raise self._malformed(exc, operation) from exc
