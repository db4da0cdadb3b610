"""Concurrent checkout requests."""

from concurrent.futures import ThreadPoolExecutor

from protean import current_domain
from storefront.cart.persisted import PersistedCart
from storefront.cart.service import add_product
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.errors import EmptyCart, InsufficientStock
from storefront.identity.port import Identity
from storefront.order.order import Order
from storefront.order.placement import place_order


def test_double_submit_places_one_order(customer, make_product, shipping_address):
    product = make_product(stock=10)
    add_product(PersistedCart(customer), product.id, 3)

    def submit(_):
        with storefront.domain_context():
            try:
                return place_order(customer, shipping_address, "card").id
            except EmptyCart:
                return None

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(submit, range(4)))

    placed = [r for r in results if r is not None]
    assert len(placed) == 1
    assert current_domain.repository_for(Order)._dao.query.all().total == 1
    assert current_domain.repository_for(Product).get(product.id).stock == 7


def test_customers_racing_for_last_units(make_product, shipping_address):
    product = make_product(stock=3)
    buyers = [Identity(customer_id=f"cust-race-{index}") for index in range(6)]
    for buyer in buyers:
        add_product(PersistedCart(buyer), product.id, 2)

    def submit(buyer):
        with storefront.domain_context():
            try:
                return place_order(buyer, shipping_address, "card").id
            except InsufficientStock:
                return None

    with ThreadPoolExecutor(max_workers=6) as pool:
        results = list(pool.map(submit, buyers))

    assert len([r for r in results if r is not None]) == 1
    assert current_domain.repository_for(Order)._dao.query.all().total == 1
    assert current_domain.repository_for(Product).get(product.id).stock == 1
