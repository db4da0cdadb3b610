"""Order aggregate: a checked-out cart, frozen at the moment of purchase.

Line items, the shipping address and the price breakdown are copies taken at
checkout and never change afterwards. Only the status, the tracking number
and the timestamps move.

State machine:
    pending → processing → shipped → delivered
    pending | processing → cancelled

Customers may cancel while the order is pending or processing. Staff may set
any known status through :meth:`Order.update_status`.
"""

import json
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from enum import Enum
from uuid import uuid4

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront import config
from storefront.domain import storefront
from storefront.errors import InvalidTransition
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.pricing.calculator import PriceBreakdown


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


_CANCELLABLE_STATES = {OrderStatus.PENDING, OrderStatus.PROCESSING}


def new_order_number(now: datetime) -> str:
    return f"ORD-{now:%Y%m%d}-{uuid4().hex[:6].upper()}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships, as entered at checkout."""

    full_name = String(required=True, max_length=255)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)


@storefront.value_object(part_of="Order")
class OrderPricing:
    """Cent-rounded price breakdown. ``total_amount`` is always the sum of the parts."""

    subtotal = Float(default=0.0)
    shipping_cost = Float(default=0.0)
    tax = Float(default=0.0)
    total_amount = Float(default=0.0)
    currency = String(max_length=3, default="USD")

    @invariant.post
    def total_is_sum_of_parts(self):
        parts = sum(Decimal(str(value or 0.0)) for value in (self.subtotal, self.shipping_cost, self.tax))
        if parts != Decimal(str(self.total_amount or 0.0)):
            raise ValidationError({"total_amount": ["Total must equal subtotal + shipping + tax"]})

    @classmethod
    def from_breakdown(cls, breakdown: PriceBreakdown) -> "OrderPricing":
        rounded = breakdown.rounded()
        return cls(
            subtotal=float(rounded.subtotal),
            shipping_cost=float(rounded.shipping_cost),
            tax=float(rounded.tax),
            total_amount=float(rounded.total),
            currency=config.CURRENCY,
        )


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderLine:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255, sanitize=False)
    image = String(max_length=500)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    order_number = String(required=True, max_length=30)
    customer_id = Identifier(required=True)
    items = HasMany(OrderLine)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = String(max_length=50)
    pricing = ValueObject(OrderPricing)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    tracking_number = String(max_length=255)
    estimated_delivery = DateTime()
    cancelled_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(cls, customer_id, lines, shipping_address, payment_method, breakdown: PriceBreakdown):
        """Build a pending order.

        Args:
            customer_id: Owner of the order.
            lines: Dicts with product_id, name, image, quantity, unit_price.
            shipping_address: Dict of ShippingAddress fields.
            payment_method: Opaque payment method tag.
            breakdown: Unrounded prices; rounded to cents here.
        """
        now = datetime.now(UTC)
        order = cls(
            order_number=new_order_number(now),
            customer_id=str(customer_id),
            items=[OrderLine(**line) for line in lines],
            shipping_address=ShippingAddress(**shipping_address),
            payment_method=payment_method,
            pricing=OrderPricing.from_breakdown(breakdown),
            status=OrderStatus.PENDING.value,
            estimated_delivery=now + timedelta(days=config.ESTIMATED_DELIVERY_DAYS),
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                customer_id=str(customer_id),
                items=json.dumps(
                    [
                        {"product_id": str(i.product_id), "quantity": i.quantity, "unit_price": i.unit_price}
                        for i in order.items
                    ]
                ),
                item_count=sum(i.quantity for i in order.items),
                total_amount=order.pricing.total_amount,
                placed_at=now,
            )
        )
        return order

    @property
    def is_cancellable(self) -> bool:
        return OrderStatus(self.status) in _CANCELLABLE_STATES

    def cancel(self):
        if not self.is_cancellable:
            raise InvalidTransition(str(self.id), self.status, OrderStatus.CANCELLED.value)

        previous_status = self.status
        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_at = now
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                previous_status=previous_status,
                items=json.dumps([{"product_id": str(i.product_id), "quantity": i.quantity} for i in self.items]),
                cancelled_at=now,
            )
        )

    def update_status(self, status, tracking_number=None):
        """Set any known status, with no transition rules and no stock effects."""
        try:
            new_status = OrderStatus(status)
        except ValueError:
            raise ValidationError({"status": [f"Unknown order status '{status}'"]}) from None

        previous_status = self.status
        self.status = new_status.value
        if tracking_number is not None:
            self.tracking_number = tracking_number
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=new_status.value,
                tracking_number=self.tracking_number,
            )
        )

    def to_dict(self) -> dict:
        address = self.shipping_address
        return {
            "id": str(self.id),
            "order_number": self.order_number,
            "customer_id": str(self.customer_id),
            "items": [
                {
                    "id": str(i.id),
                    "product_id": str(i.product_id),
                    "name": i.name,
                    "image": i.image,
                    "quantity": i.quantity,
                    "price": i.unit_price,
                }
                for i in self.items
            ],
            "shipping_address": address.to_dict() if address else None,
            "payment_method": self.payment_method,
            "subtotal": self.pricing.subtotal,
            "shipping_cost": self.pricing.shipping_cost,
            "tax": self.pricing.tax,
            "total_amount": self.pricing.total_amount,
            "currency": self.pricing.currency,
            "status": self.status,
            "tracking_number": self.tracking_number,
            "estimated_delivery": self.estimated_delivery.isoformat() if self.estimated_delivery else None,
            "cancelled_at": self.cancelled_at.isoformat() if self.cancelled_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
