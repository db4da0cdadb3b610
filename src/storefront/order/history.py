"""Order history queries for customers and staff."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront import config
from storefront.errors import Forbidden
from storefront.identity import require_customer
from storefront.identity.port import Identity
from storefront.order.cancellation import load_order
from storefront.order.order import Order, OrderStatus
from storefront.utils.pagination import Page, clamp


def order_history(identity: Identity, page=1, page_size=None) -> Page:
    """The caller's own orders, newest first."""
    customer_id = require_customer(identity)
    page, page_size = clamp(page, page_size)
    results = current_domain.repository_for(Order).find_by_customer(
        customer_id, offset=(page - 1) * page_size, limit=page_size
    )
    return Page(items=results.items, total=results.total, page=page, page_size=page_size)


def get_order(identity: Identity, order_id) -> Order:
    customer_id = require_customer(identity)
    order = load_order(order_id)
    if str(order.customer_id) != customer_id and not identity.is_admin:
        raise Forbidden(details={"order_id": str(order_id)})
    return order


def all_orders(status=None, page=1, page_size=None) -> Page:
    if status and status not in {s.value for s in OrderStatus}:
        raise ValidationError({"status": [f"Unknown order status '{status}'"]})
    page, page_size = clamp(page, page_size, default_size=config.ADMIN_PAGE_SIZE)
    results = current_domain.repository_for(Order).find_all(
        status=status, offset=(page - 1) * page_size, limit=page_size
    )
    return Page(items=results.items, total=results.total, page=page, page_size=page_size)
