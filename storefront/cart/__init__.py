"""
Pure cart helpers: reconciliation, totals, and duplicate checks. No I/O.
"""
from .aggregator import order_summary, total_count, total_value
from .guards import check_mutation, check_not_duplicate, contains_product, find_entry
from .reconciler import reconcile

__all__ = [
    'reconcile',
    'total_value',
    'total_count',
    'order_summary',
    'contains_product',
    'find_entry',
    'check_mutation',
    'check_not_duplicate',
]
