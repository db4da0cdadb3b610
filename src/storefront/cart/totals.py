"""Cart totals, recomputed from the full line collection on every change."""

from collections.abc import Iterable
from decimal import Decimal

from storefront.pricing.calculator import line_subtotal


def compute_totals(lines: Iterable) -> tuple[int, Decimal]:
    """Return ``(total_items, total_amount)`` for lines with ``unit_price`` and ``quantity``."""
    lines = list(lines)
    total_items = sum(line.quantity for line in lines)
    total_amount = line_subtotal((line.unit_price, line.quantity) for line in lines)
    return total_items, total_amount
