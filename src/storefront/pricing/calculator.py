"""Pricing calculator: subtotal, shipping, tax and grand total.

Pure functions over :class:`~decimal.Decimal`. The cart display and order
creation both price through :func:`quote`, so the figures a shopper sees and
the figures frozen on the order are computed by the same code.

Policy:
    shipping  = 0 when subtotal >= FREE_SHIPPING_THRESHOLD, else FLAT_SHIPPING_FEE
    tax       = subtotal * TAX_RATE
    total     = subtotal + shipping + tax

Amounts stay unrounded while they are being combined. Rounding to cents
(half-up) happens once, in :meth:`PriceBreakdown.rounded`, when a figure is
displayed or persisted.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from storefront import config
from storefront.errors import InvalidAmount

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value) -> Decimal:
    """Convert ``value`` to a finite, non-negative Decimal.

    Floats go through ``str`` so that ``19.99`` becomes ``Decimal("19.99")``
    rather than its binary expansion.
    """
    if isinstance(value, bool):
        raise InvalidAmount(value)
    if isinstance(value, float):
        value = str(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidAmount(value) from None

    if not amount.is_finite() or amount < ZERO:
        raise InvalidAmount(value)
    return amount


def round_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def line_subtotal(lines: Iterable[tuple]) -> Decimal:
    """Sum ``price * quantity`` over ``(price, quantity)`` pairs."""
    subtotal = ZERO
    for price, quantity in lines:
        subtotal += to_decimal(price) * quantity
    return subtotal


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Decimal
    shipping_cost: Decimal
    tax: Decimal
    total: Decimal

    def rounded(self) -> "PriceBreakdown":
        """Cent-rounded copy whose total is the sum of the rounded parts."""
        subtotal = round_money(self.subtotal)
        shipping_cost = round_money(self.shipping_cost)
        tax = round_money(self.tax)
        return PriceBreakdown(
            subtotal=subtotal,
            shipping_cost=shipping_cost,
            tax=tax,
            total=subtotal + shipping_cost + tax,
        )

    def as_floats(self) -> dict[str, float]:
        rounded = self.rounded()
        return {
            "subtotal": float(rounded.subtotal),
            "shipping_cost": float(rounded.shipping_cost),
            "tax": float(rounded.tax),
            "total": float(rounded.total),
        }


def shipping_for(subtotal: Decimal) -> Decimal:
    if subtotal >= config.FREE_SHIPPING_THRESHOLD:
        return ZERO
    return config.FLAT_SHIPPING_FEE


def quote(subtotal) -> PriceBreakdown:
    """Price a basket whose items add up to ``subtotal``."""
    amount = to_decimal(subtotal)
    shipping_cost = shipping_for(amount)
    tax = amount * config.TAX_RATE
    return PriceBreakdown(
        subtotal=amount,
        shipping_cost=shipping_cost,
        tax=tax,
        total=amount + shipping_cost + tax,
    )
