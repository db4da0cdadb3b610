"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.order.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_customer(self, customer_id, offset=0, limit=10):
        """A customer's orders, newest first, as a Protean ResultSet."""
        return (
            self._dao.query.filter(customer_id=str(customer_id))
            .order_by("-created_at")
            .offset(offset)
            .limit(limit)
            .all()
        )

    def find_all(self, status=None, offset=0, limit=20):
        query = self._dao.query
        if status:
            query = query.filter(status=status)
        return query.order_by("-created_at").offset(offset).limit(limit).all()

    def discard(self, order: Order) -> None:
        """Delete an order that never completed checkout."""
        self._dao.delete(order)
