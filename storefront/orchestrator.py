"""
Catalog/cart orchestration.

CatalogCartOrchestrator is the only stateful component of the engine and the
only one that talks to both the catalog and the cart clients. It drives three
independent sequences:

1. Initial load: catalog and (for signed-in visitors) the raw cart are fetched
   concurrently; the cart is reconciled against the freshly fetched catalog.
2. Search: keystrokes go through a SearchDebouncer; results replace the
   displayed products only. The cart keeps reflecting the full catalog.
3. Mutations: add, quantity change and removal (quantity zero) are checked
   locally (session, duplicate, quantity) before the cart service is called;
   the service's full cart then replaces local cart entries.

Every remote failure becomes a transient notice and leaves the previous valid
state in place. Responses carry a per-operation sequence number. Grid results
are dropped once a newer load or search has been issued; catalog snapshots and
carts are dropped only when a newer response has already been applied, so a
failed later request never hides an earlier success.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional

from storefront.cart import (
    check_mutation,
    check_not_duplicate,
    find_entry,
    order_summary,
    reconcile,
    total_count,
    total_value,
)
from storefront.error_handler import ErrorHandler, NoticeBoard, NoticeListener
from storefront.integrations.contracts.interfaces import (
    CartClient,
    CartEntry,
    CatalogClient,
    OperationClass,
    OrderSummary,
    Product,
    RawCartLine,
    SessionAuth,
    StorefrontView,
)
from storefront.integrations.errors import (
    NotFound,
    PreconditionRejected,
    ServerError,
    StorefrontError,
)
from storefront.search import DEFAULT_DELAY_MS, SearchDebouncer
from storefront.utils.config_loader import StorefrontConfig

logger = logging.getLogger(__name__)

NOT_IN_CART_MESSAGE = "Item is not in the cart."


class CatalogCartOrchestrator:
    def __init__(
        self,
        catalog_client: CatalogClient,
        cart_client: CartClient,
        session: Optional[SessionAuth] = None,
        *,
        debounce_ms: int = DEFAULT_DELAY_MS,
        prevent_duplicates: bool = True,
        shipping_charge: float = 0,
        notices: Optional[NoticeBoard] = None,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.catalog_client = catalog_client
        self.cart_client = cart_client
        self.session = session or SessionAuth.guest()
        self.prevent_duplicates = prevent_duplicates
        self.shipping_charge = shipping_charge
        self.notices = notices or NoticeBoard()
        self.error_handler = error_handler or ErrorHandler()
        self.debouncer = SearchDebouncer(self.search, delay_ms=debounce_ms)

        # Full, unfiltered snapshot used for reconciliation.
        self.catalog: List[Product] = []
        # What the grid shows: the snapshot or the latest search result.
        self.products: List[Product] = []
        self.cart_items: List[CartEntry] = []
        self.is_loading = False

        # Last raw cart from the service; re-reconciled when the snapshot changes.
        self._raw_cart: Optional[List[RawCartLine]] = None
        self._issued: Dict[OperationClass, int] = {op: 0 for op in OperationClass}
        self._applied: Dict[OperationClass, int] = {op: 0 for op in OperationClass}

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    @property
    def total_value(self) -> float:
        return total_value(self.cart_items)

    @property
    def total_count(self) -> int:
        return total_count(self.cart_items)

    def order_summary(self) -> OrderSummary:
        return order_summary(self.cart_items, shipping=self.shipping_charge)

    def view(self) -> StorefrontView:
        return StorefrontView(
            products=list(self.products),
            cart_items=list(self.cart_items) if self.is_authenticated else [],
            is_loading=self.is_loading,
            is_authenticated=self.is_authenticated,
            total_value=self.total_value,
            total_count=self.total_count,
        )

    # ------------------------------------------------------------------
    # Sequencing helpers
    # ------------------------------------------------------------------

    def _issue(self, op: OperationClass) -> int:
        self._issued[op] += 1
        return self._issued[op]

    def _is_latest(self, op: OperationClass, seq: int) -> bool:
        """True if no request of this class was issued after ``seq``."""
        latest = self._issued[op] == seq
        if not latest:
            logger.debug("Discarding superseded %s response (seq=%s, latest=%s)", op.value, seq, self._issued[op])
        return latest

    def _accept(self, op: OperationClass, seq: int) -> bool:
        """True, and record ``seq`` as applied, if it is newer than the last applied response."""
        if seq <= self._applied[op]:
            logger.debug("Discarding stale %s response (seq=%s, applied=%s)", op.value, seq, self._applied[op])
            return False
        self._applied[op] = seq
        return True

    def _report(self, exc: Exception, operation: str) -> None:
        self.notices.post(self.error_handler.handle_exception(exc, {"operation": operation}))

    def _reconcile_cart(self) -> None:
        self.cart_items = reconcile(self._raw_cart or [], self.catalog)

    # ------------------------------------------------------------------
    # Initial load
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Fetch the catalog and, when signed in, the cart; then reconcile."""
        display_seq = self._issue(OperationClass.DISPLAY)
        cart_seq = self._issue(OperationClass.CART)
        self.is_loading = True

        _, raw_cart = await asyncio.gather(
            self._load_catalog(display_seq),
            self._fetch_raw_cart(),
        )
        self._apply_raw_cart(raw_cart, cart_seq)

    async def _load_catalog(self, display_seq: int) -> bool:
        """Fetch the full catalog into the snapshot and, unless a search has
        been issued since, into the grid."""
        snapshot_seq = self._issue(OperationClass.CATALOG)
        try:
            products = await self.catalog_client.fetch_catalog()
        except StorefrontError as exc:
            self._report(exc, "fetch_catalog")
            if self._issued[OperationClass.DISPLAY] == display_seq:
                self.is_loading = False
            return False

        if self._accept(OperationClass.CATALOG, snapshot_seq):
            self.catalog = list(products)
            self._reconcile_cart()
            logger.info("Catalog loaded: %d products", len(products))
        if self._is_latest(OperationClass.DISPLAY, display_seq):
            self.products = list(products)
            self.is_loading = False
        return True

    async def _fetch_raw_cart(self) -> Optional[List[RawCartLine]]:
        if not self.is_authenticated:
            return None
        try:
            return await self.cart_client.fetch_cart(self.session)
        except StorefrontError as exc:
            self._report(exc, "fetch_cart")
            return []

    def _apply_raw_cart(self, raw_cart: Optional[List[RawCartLine]], seq: int) -> None:
        if not self._accept(OperationClass.CART, seq):
            return
        self._raw_cart = list(raw_cart or [])
        self._reconcile_cart()

    async def refresh_cart(self) -> None:
        """Re-fetch the persisted cart and reconcile it against the current snapshot."""
        seq = self._issue(OperationClass.CART)
        raw_cart = await self._fetch_raw_cart()
        self._apply_raw_cart(raw_cart, seq)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def on_search_input(self, text: str) -> None:
        """Keystroke handler: schedule a debounced search for ``text``."""
        self.debouncer.submit(text)

    async def search(self, text: str) -> None:
        seq = self._issue(OperationClass.DISPLAY)
        self.is_loading = True
        try:
            results = await self.catalog_client.search_catalog(text)
        except NotFound:
            results = []
        except ServerError as exc:
            self._report(exc, "search_catalog")
            logger.info("Search failed with a server error; falling back to the full catalog")
            await self._load_catalog(self._issue(OperationClass.DISPLAY))
            return
        except StorefrontError as exc:
            self._report(exc, "search_catalog")
            if self._issued[OperationClass.DISPLAY] == seq:
                self.is_loading = False
            return

        if not self._is_latest(OperationClass.DISPLAY, seq):
            return
        self.products = list(results)
        self.is_loading = False
        logger.info("Search %r: %d products", text, len(results))

    # ------------------------------------------------------------------
    # Cart mutations
    # ------------------------------------------------------------------

    async def add_to_cart(self, product_id: str, qty: int = 1) -> bool:
        """Add a product from a catalog card. Returns True if the cart service accepted it."""
        try:
            check_mutation(self.session, product_id, qty, allow_removal=False)
            if self.prevent_duplicates:
                check_not_duplicate(self.cart_items, product_id)
        except PreconditionRejected as exc:
            self._report(exc, "add_to_cart")
            return False
        return await self._mutate(product_id, qty, "add_to_cart")

    async def update_quantity(self, product_id: str, qty: int) -> bool:
        """Set the quantity of a product already in the cart. Zero removes it."""
        operation = "remove_from_cart" if qty == 0 else "update_quantity"
        try:
            check_mutation(self.session, product_id, qty)
            if find_entry(self.cart_items, product_id) is None:
                raise PreconditionRejected(
                    NOT_IN_CART_MESSAGE, reason="not_in_cart", payload={"productId": product_id}
                )
        except PreconditionRejected as exc:
            self._report(exc, operation)
            return False
        return await self._mutate(product_id, qty, operation)

    async def remove_from_cart(self, product_id: str) -> bool:
        return await self.update_quantity(product_id, 0)

    async def increment(self, product_id: str) -> bool:
        entry = find_entry(self.cart_items, product_id)
        return await self.update_quantity(product_id, (entry.qty if entry else 0) + 1)

    async def decrement(self, product_id: str) -> bool:
        """Lower the quantity by one; from one this removes the line."""
        entry = find_entry(self.cart_items, product_id)
        return await self.update_quantity(product_id, (entry.qty if entry else 0) - 1)

    async def _mutate(self, product_id: str, qty: int, operation: str) -> bool:
        seq = self._issue(OperationClass.CART)
        try:
            lines = await self.cart_client.mutate_cart(self.session, product_id, qty)
        except StorefrontError as exc:
            self._report(exc, operation)
            return False
        if self._accept(OperationClass.CART, seq):
            self._raw_cart = list(lines)
            self._reconcile_cart()
        return True

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    async def login(self, session: SessionAuth) -> None:
        self.session = session
        await self.refresh_cart()

    def logout(self) -> None:
        self.session = SessionAuth.guest()
        # Responses to requests made before logout must not bring the cart back.
        self._applied[OperationClass.CART] = self._issue(OperationClass.CART)
        self._raw_cart = None
        self.cart_items = []

    def close(self) -> None:
        """Unmount: drop any pending search so it never fires."""
        self.debouncer.cancel()


def build_orchestrator(
    config: StorefrontConfig,
    session: Optional[SessionAuth] = None,
    listener: Optional[NoticeListener] = None,
) -> CatalogCartOrchestrator:
    """Wire clients according to ``config.integrations_mode``."""
    if config.integrations_mode == "mock":
        from storefront.integrations.clients.mocks import MockCartClient, MockCatalogClient

        catalog_client: CatalogClient = MockCatalogClient()
        cart_client: CartClient = MockCartClient()
    else:
        from storefront.integrations.clients.real_http import HttpCartClient, HttpCatalogClient

        catalog_client = HttpCatalogClient(base_url=config.endpoint, timeout_seconds=config.timeout_seconds)
        cart_client = HttpCartClient(base_url=config.endpoint, timeout_seconds=config.timeout_seconds)

    return CatalogCartOrchestrator(
        catalog_client,
        cart_client,
        session,
        debounce_ms=config.search_debounce_ms,
        prevent_duplicates=config.prevent_duplicates,
        shipping_charge=config.shipping_charge,
        notices=NoticeBoard(listener),
    )
