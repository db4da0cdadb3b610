"""Checkout: turn a customer's persisted cart into a pending order.

Checkout has three effects: stock is decremented, the order is saved, and the
cart is cleared. They are applied one after another, and every applied effect
registers its undo on a compensation stack. If a later step fails (a guarded
decrement losing a race for the last units, a storage error) the stack
unwinds, so the caller sees either all three effects or none.

The customer's cart lock is held for the whole checkout. A second checkout
for the same customer waits, then finds the cart already empty.
"""

from contextlib import ExitStack

from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.cart.items import ClearCart
from storefront.catalogue.store import adjust_stock, find_product
from storefront.domain import logger
from storefront.errors import EmptyCart, InsufficientStock, NotFound
from storefront.identity import require_customer
from storefront.identity.port import Identity
from storefront.order.order import Order
from storefront.pricing.calculator import line_subtotal, quote
from storefront.utils.locks import cart_locks


def _order_lines(cart_lines) -> list[dict]:
    """Line snapshots for the order, failing on the first line stock cannot cover."""
    order_lines = []
    for line in cart_lines:
        product = find_product(line.product_id)
        available = product.stock if product else 0
        if line.quantity > available:
            raise InsufficientStock(line.product_id, line.quantity, available, name=line.name)

        order_lines.append(
            {
                "product_id": line.product_id,
                "name": product.name,
                "image": product.primary_image or line.image,
                "quantity": line.quantity,
                "unit_price": float(line.unit_price),
            }
        )
    return order_lines


def _take_stock(line) -> None:
    try:
        adjust_stock(line.product_id, -line.quantity)
    except NotFound:
        raise InsufficientStock(line.product_id, line.quantity, 0, name=line.name) from None


def _restock(product_id, quantity) -> None:
    try:
        adjust_stock(product_id, quantity)
    except NotFound:
        logger.warning("Restock skipped for removed product", product_id=product_id, quantity=quantity)


def place_order(identity: Identity, shipping_address: dict, payment_method: str) -> Order:
    customer_id = require_customer(identity)

    with cart_locks.hold(customer_id):
        cart = current_domain.repository_for(ShoppingCart).find_for_customer(customer_id)
        if cart is None or not cart.items:
            raise EmptyCart(customer_id)

        cart_lines = cart.lines()
        order = Order.place(
            customer_id=customer_id,
            lines=_order_lines(cart_lines),
            shipping_address=shipping_address,
            payment_method=payment_method,
            breakdown=quote(line_subtotal((line.unit_price, line.quantity) for line in cart_lines)),
        )

        order_repo = current_domain.repository_for(Order)
        try:
            with ExitStack() as compensation:
                for line in cart_lines:
                    _take_stock(line)
                    compensation.callback(_restock, line.product_id, line.quantity)

                order_repo.add(order)
                compensation.callback(order_repo.discard, order)

                current_domain.process(ClearCart(customer_id=customer_id), asynchronous=False)
                compensation.pop_all()
        except Exception as exc:
            logger.warning("Checkout rolled back", customer_id=customer_id, reason=str(exc))
            raise

    logger.info(
        "Order placed",
        order_id=str(order.id),
        order_number=order.order_number,
        customer_id=customer_id,
        total_amount=order.pricing.total_amount,
    )
    return order
