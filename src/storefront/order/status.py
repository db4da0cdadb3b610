"""Staff status updates: command and handler.

Callers authorize before dispatching; the handler trusts the command.
"""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.cancellation import load_order
from storefront.order.order import Order
from storefront.utils.locks import order_locks


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    tracking_number = String(max_length=255)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_status(command.status, tracking_number=command.tracking_number)
        repo.add(order)


def update_order_status(order_id, status, tracking_number=None) -> Order:
    with order_locks.hold(order_id):
        load_order(order_id)
        current_domain.process(
            UpdateOrderStatus(order_id=str(order_id), status=status, tracking_number=tracking_number),
            asynchronous=False,
        )
    return current_domain.repository_for(Order).get(str(order_id))
