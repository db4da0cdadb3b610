"""Customer order cancellation.

Cancelling returns every line's quantity to stock. Each restock registers its
reversal on a compensation stack and the cancelled order is saved last, so a
failure part way leaves the order pending with stock as it was. The order lock
makes the status check and the restock one step, so a repeated cancel request
finds the order already cancelled and restocks nothing.
"""

from contextlib import ExitStack

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.store import adjust_stock
from storefront.domain import logger
from storefront.errors import Forbidden, NotFound
from storefront.identity import require_customer
from storefront.identity.port import Identity
from storefront.order.order import Order
from storefront.utils.locks import order_locks


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(str(order_id))
    except ObjectNotFoundError:
        raise NotFound("Order", str(order_id)) from None


def _restock(order: Order, line) -> bool:
    """Return a line to stock; False when the product has since been removed."""
    try:
        adjust_stock(line.product_id, line.quantity)
    except NotFound:
        logger.warning(
            "Restock skipped for removed product",
            order_id=str(order.id),
            product_id=str(line.product_id),
            quantity=line.quantity,
        )
        return False
    return True


def cancel_order(identity: Identity, order_id) -> Order:
    customer_id = require_customer(identity)

    with order_locks.hold(order_id):
        order = load_order(order_id)
        if str(order.customer_id) != customer_id:
            raise Forbidden(details={"order_id": str(order_id)})

        order.cancel()
        try:
            with ExitStack() as compensation:
                for line in order.items:
                    if _restock(order, line):
                        compensation.callback(adjust_stock, line.product_id, -line.quantity)

                current_domain.repository_for(Order).add(order)
                compensation.pop_all()
        except Exception as exc:
            logger.warning("Cancellation rolled back", order_id=str(order.id), reason=str(exc))
            raise

    logger.info("Order cancelled", order_id=str(order.id), customer_id=customer_id)
    return order
