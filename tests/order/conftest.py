import pytest


@pytest.fixture()
def checkout(shipping_address):
    """Fill the identity's cart with ``(product, quantity)`` pairs and place the order."""
    from storefront.cart.persisted import PersistedCart
    from storefront.cart.service import add_product
    from storefront.order.placement import place_order

    def _checkout(identity, *lines, payment_method="card"):
        cart = PersistedCart(identity)
        for product, quantity in lines:
            add_product(cart, product.id, quantity)
        return place_order(identity, shipping_address, payment_method)

    return _checkout
