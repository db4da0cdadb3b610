"""BDD tests for both cart variants."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when
from storefront.cart.local import LocalCart
from storefront.cart.persisted import PersistedCart
from storefront.cart.service import add_product, describe_cart
from storefront.catalogue.product import Product

scenarios("features/cart.feature")


@pytest.fixture()
def products():
    return {}


@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def product_in_stock(products, make_product, name, price, stock):
    products[name] = make_product(name=name, price=price, stock=stock)


@given(parsers.cfparse("a {variant} cart"), target_fixture="cart")
def cart_variant(variant, customer):
    return LocalCart() if variant == "guest" else PersistedCart(customer)


@when(parsers.cfparse('{quantity:d} of "{name}" is added'))
def add(cart, products, quantity, name):
    add_product(cart, products[name].id, quantity)


@when(parsers.cfparse('the price of "{name}" changes to {price:f}'))
def change_price(products, name, price):
    repo = current_domain.repository_for(Product)
    product = repo.get(products[name].id)
    product.price = price
    repo.add(product)


@when(parsers.cfparse('the "{name}" quantity is set to {quantity:d}'))
def set_quantity(cart, products, name, quantity):
    line = cart.view().line_for_product(products[name].id)
    cart.set_quantity(line.item_id, quantity)


@then(parsers.cfparse("the cart has {count:d} line"))
@then(parsers.cfparse("the cart has {count:d} lines"))
def cart_has_lines(cart, count):
    assert len(cart.view().items) == count


@then(parsers.cfparse("the cart holds {count:d} items"))
def cart_holds(cart, count):
    assert cart.view().total_items == count


@then(parsers.cfparse("the cart total is {total:f}"))
def cart_total_is(cart, total):
    assert float(cart.view().total_amount) == pytest.approx(total)


@then(parsers.cfparse('the "{name}" line is flagged "{status}"'))
def line_flagged(cart, products, name, status):
    payload = describe_cart(cart.view())
    line = next(i for i in payload["items"] if i["product_id"] == str(products[name].id))
    assert line["stock_status"] == status


@then("the cart cannot check out")
def cannot_check_out(cart):
    assert describe_cart(cart.view())["can_checkout"] is False
