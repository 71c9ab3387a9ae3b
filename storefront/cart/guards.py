from typing import Iterable, Optional

from storefront.integrations.contracts.interfaces import CartEntry, SessionAuth
from storefront.integrations.errors import PreconditionRejected

LOGIN_REQUIRED_MESSAGE = "Login to add an item to the Cart."
DUPLICATE_ITEM_MESSAGE = "Item already in cart. Use the cart sidebar to update quantity or remove item."
MIN_QTY_MESSAGE = "Quantity cannot go below 1."
NEGATIVE_QTY_MESSAGE = "Quantity cannot be negative."


def contains_product(entries: Iterable[CartEntry], product_id: str) -> bool:
    """True if some cart entry already holds ``product_id``."""
    return any(entry.id == product_id for entry in entries)


def find_entry(entries: Iterable[CartEntry], product_id: str) -> Optional[CartEntry]:
    for entry in entries:
        if entry.id == product_id:
            return entry
    return None


def check_mutation(session: SessionAuth, product_id: str, qty: int, *, allow_removal: bool = True) -> None:
    """Raise PreconditionRejected if a cart write must not reach the network.

    A quantity of zero removes the line, unless ``allow_removal`` is False
    (adding from a catalog card must add at least one).
    """
    if not session.is_authenticated:
        raise PreconditionRejected(LOGIN_REQUIRED_MESSAGE, reason="unauthenticated")
    if not product_id:
        raise PreconditionRejected("A product id is required.", reason="missing_product")
    payload = {"productId": product_id, "qty": qty}
    if qty < 0:
        raise PreconditionRejected(NEGATIVE_QTY_MESSAGE, reason="negative_qty", payload=payload)
    if qty == 0 and not allow_removal:
        raise PreconditionRejected(MIN_QTY_MESSAGE, reason="non_positive_qty", payload=payload)


def check_not_duplicate(entries: Iterable[CartEntry], product_id: str) -> None:
    if contains_product(entries, product_id):
        raise PreconditionRejected(
            DUPLICATE_ITEM_MESSAGE,
            reason="duplicate",
            payload={"productId": product_id},
        )
