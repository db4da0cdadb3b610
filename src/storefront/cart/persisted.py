"""Persisted cart: the CartPort adapter over the ShoppingCart aggregate.

Every mutation is a command processed synchronously while the customer's cart
lock is held, so concurrent requests for one customer apply one at a time,
each reading the state the previous one wrote.
"""

from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, SetCartItemQuantity
from storefront.cart.port import CartPort, CartView
from storefront.catalogue.snapshot import ProductSnapshot
from storefront.errors import Forbidden
from storefront.identity.port import Identity
from storefront.utils.locks import cart_locks


class PersistedCart(CartPort):
    def __init__(self, identity: Identity):
        if identity.is_anonymous:
            raise Forbidden("Sign in to use a saved cart")
        self.customer_id = identity.customer_id

    @property
    def _repo(self):
        return current_domain.repository_for(ShoppingCart)

    def fetch(self) -> CartView:
        """Load the customer's cart, creating and saving an empty one on first use."""
        with cart_locks.hold(self.customer_id):
            cart = self._repo.find_for_customer(self.customer_id)
            if cart is None:
                cart = ShoppingCart.create(customer_id=self.customer_id)
                self._repo.add(cart)
            return cart.view()

    def view(self) -> CartView:
        cart = self._repo.find_for_customer(self.customer_id)
        return cart.view() if cart else CartView()

    def _process(self, command) -> CartView:
        with cart_locks.hold(self.customer_id):
            current_domain.process(command, asynchronous=False)
            return self.view()

    def add(self, snapshot: ProductSnapshot, quantity: int = 1) -> CartView:
        return self._process(
            AddToCart(
                customer_id=self.customer_id,
                product_id=snapshot.product_id,
                name=snapshot.name,
                image=snapshot.image,
                unit_price=float(snapshot.price),
                quantity=quantity,
            )
        )

    def set_quantity(self, item_id, quantity: int) -> CartView:
        return self._process(SetCartItemQuantity(customer_id=self.customer_id, item_id=item_id, quantity=quantity))

    def remove(self, item_id) -> CartView:
        return self._process(RemoveFromCart(customer_id=self.customer_id, item_id=item_id))

    def clear(self) -> CartView:
        return self._process(ClearCart(customer_id=self.customer_id))
