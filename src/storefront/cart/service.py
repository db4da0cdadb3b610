"""Cart operations that consult the live catalogue.

Adding looks the product up once to capture its snapshot. Reading a cart
compares every line against current stock and flags the lines checkout would
reject, without changing the cart.
"""

from enum import Enum

from storefront import config
from storefront.cart.port import CartPort, CartView
from storefront.catalogue.store import find_product, get_product


class StockStatus(Enum):
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    EXCEEDS_STOCK = "exceeds_stock"
    UNAVAILABLE = "unavailable"


def add_product(cart: CartPort, product_id, quantity: int = 1) -> CartView:
    return cart.add(get_product(product_id), quantity)


def stock_status(quantity: int, available: int | None) -> StockStatus:
    if available is None:
        return StockStatus.UNAVAILABLE
    if quantity > available:
        return StockStatus.EXCEEDS_STOCK
    if available < config.LOW_STOCK_THRESHOLD:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def describe_cart(view: CartView) -> dict:
    """Cart payload with pricing and a stock verdict per line."""
    payload = view.to_dict()
    can_checkout = not view.is_empty

    for line, item in zip(view.items, payload["items"], strict=True):
        product = find_product(line.product_id)
        available = product.stock if product else None
        status = stock_status(line.quantity, available)
        item["available"] = available or 0
        item["stock_status"] = status.value
        if status in (StockStatus.EXCEEDS_STOCK, StockStatus.UNAVAILABLE):
            can_checkout = False

    payload["can_checkout"] = can_checkout
    return payload
