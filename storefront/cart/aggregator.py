from typing import Iterable, Sequence

from storefront.integrations.contracts.interfaces import CartEntry, OrderSummary


def total_value(entries: Iterable[CartEntry]) -> float:
    return sum((entry.qty * entry.cost for entry in entries), 0)


def total_count(entries: Iterable[CartEntry]) -> int:
    return sum((entry.qty for entry in entries), 0)


def order_summary(entries: Sequence[CartEntry], shipping: float = 0) -> OrderSummary:
    """Figures for the read-only order details block shown at checkout."""
    subtotal = total_value(entries)
    return OrderSummary(
        products=total_count(entries),
        subtotal=subtotal,
        shipping=shipping,
        total=subtotal + shipping,
    )
