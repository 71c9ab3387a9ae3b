import pytest

from storefront.cart import (
    check_mutation,
    check_not_duplicate,
    contains_product,
    find_entry,
    order_summary,
    reconcile,
    total_count,
    total_value,
)
from storefront.integrations.contracts.interfaces import CartEntry, RawCartLine, SessionAuth
from storefront.integrations.errors import PreconditionRejected


def _entry(pid, cost, qty):
    return CartEntry(id=pid, name=pid, category="c", cost=cost, rating=3, image_url="", qty=qty)


def test_totals_of_empty_cart_are_zero():
    assert total_value([]) == 0
    assert total_count([]) == 0


def test_totals_are_independent_of_order():
    entries = [_entry("A", 10, 2), _entry("B", 20, 1), _entry("C", 5.5, 4)]

    assert total_value(entries) == total_value(list(reversed(entries))) == 62
    assert total_count(entries) == total_count(list(reversed(entries))) == 7


def test_catalog_scenario_totals(catalog):
    entries = reconcile([RawCartLine(product_id="A", qty=2)], catalog)

    assert [(e.id, e.cost, e.qty) for e in entries] == [("A", 10, 2)]
    assert total_value(entries) == 20
    assert total_count(entries) == 2


def test_order_summary_adds_shipping():
    summary = order_summary([_entry("A", 10, 2), _entry("B", 20, 1)], shipping=5)

    assert summary.products == 3
    assert summary.subtotal == 40
    assert summary.shipping == 5
    assert summary.total == 45


def test_order_summary_of_empty_cart():
    summary = order_summary([])
    assert (summary.products, summary.subtotal, summary.total) == (0, 0, 0)


def test_contains_product():
    entries = [_entry("A", 10, 1)]

    assert contains_product(entries, "A") is True
    assert contains_product(entries, "B") is False
    assert contains_product([], "A") is False
    assert find_entry(entries, "A").qty == 1
    assert find_entry(entries, "B") is None


def test_check_mutation_rejects_guest_before_anything_else():
    with pytest.raises(PreconditionRejected) as exc:
        check_mutation(SessionAuth.guest(), "A", 0)
    assert exc.value.reason == "unauthenticated"


def test_check_mutation_rejects_negative_qty():
    with pytest.raises(PreconditionRejected) as exc:
        check_mutation(SessionAuth(token="t"), "A", -1)
    assert exc.value.reason == "negative_qty"


def test_check_mutation_zero_qty_is_removal_unless_disallowed():
    check_mutation(SessionAuth(token="t"), "A", 0)

    with pytest.raises(PreconditionRejected) as exc:
        check_mutation(SessionAuth(token="t"), "A", 0, allow_removal=False)
    assert exc.value.reason == "non_positive_qty"


def test_check_mutation_accepts_valid_request():
    check_mutation(SessionAuth(token="t"), "A", 1)
    check_mutation(SessionAuth(token="t"), "A", 1, allow_removal=False)


def test_check_not_duplicate():
    with pytest.raises(PreconditionRejected) as exc:
        check_not_duplicate([_entry("A", 10, 1)], "A")
    assert exc.value.reason == "duplicate"
    check_not_duplicate([_entry("A", 10, 1)], "B")
