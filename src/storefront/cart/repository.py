"""Repository for the ShoppingCart aggregate."""

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront


@storefront.repository(part_of=ShoppingCart)
class ShoppingCartRepository:
    def find_for_customer(self, customer_id) -> ShoppingCart | None:
        return self._dao.query.filter(customer_id=str(customer_id)).all().first

    def for_customer(self, customer_id) -> ShoppingCart:
        """The customer's cart, or a new unsaved one when they have none yet."""
        return self.find_for_customer(customer_id) or ShoppingCart.create(customer_id=str(customer_id))
