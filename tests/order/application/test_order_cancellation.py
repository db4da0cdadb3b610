"""Application tests for customer cancellation."""

import pytest
from protean import current_domain
from storefront.catalogue.product import Product
from storefront.errors import Forbidden, InvalidTransition, NotFound
from storefront.order import cancellation
from storefront.order.cancellation import cancel_order
from storefront.order.order import Order
from storefront.order.status import update_order_status


def _stock(product):
    return current_domain.repository_for(Product).get(product.id).stock


class TestCancelOrder:
    def test_cancel_restores_stock(self, customer, make_product, checkout):
        product_a = make_product(name="A", stock=5)
        product_b = make_product(name="B", stock=4)
        order = checkout(customer, (product_a, 2), (product_b, 3))
        assert (_stock(product_a), _stock(product_b)) == (3, 1)

        cancelled = cancel_order(customer, order.id)

        assert cancelled.status == "cancelled"
        assert cancelled.cancelled_at is not None
        assert (_stock(product_a), _stock(product_b)) == (5, 4)
        assert current_domain.repository_for(Order).get(order.id).status == "cancelled"

    def test_processing_order_can_be_cancelled(self, customer, make_product, checkout):
        product = make_product(stock=5)
        order = checkout(customer, (product, 1))
        update_order_status(order.id, "processing")

        cancel_order(customer, order.id)
        assert _stock(product) == 5

    def test_shipped_order_cannot_be_cancelled(self, customer, make_product, checkout):
        product = make_product(stock=5)
        order = checkout(customer, (product, 2))
        update_order_status(order.id, "shipped", tracking_number="1Z999")

        with pytest.raises(InvalidTransition):
            cancel_order(customer, order.id)

        assert _stock(product) == 3
        assert current_domain.repository_for(Order).get(order.id).status == "shipped"

    def test_second_cancel_restocks_nothing(self, customer, make_product, checkout):
        product = make_product(stock=5)
        order = checkout(customer, (product, 2))
        cancel_order(customer, order.id)

        with pytest.raises(InvalidTransition):
            cancel_order(customer, order.id)
        assert _stock(product) == 5

    def test_other_customer_is_forbidden(self, customer, other_customer, make_product, checkout):
        product = make_product(stock=5)
        order = checkout(customer, (product, 1))

        with pytest.raises(Forbidden):
            cancel_order(other_customer, order.id)
        assert current_domain.repository_for(Order).get(order.id).status == "pending"

    def test_unknown_order(self, customer):
        with pytest.raises(NotFound):
            cancel_order(customer, "missing-order")

    def test_removed_product_is_skipped(self, customer, make_product, checkout):
        kept = make_product(name="Kept", stock=5)
        removed = make_product(name="Removed", stock=5)
        order = checkout(customer, (kept, 1), (removed, 1))

        repo = current_domain.repository_for(Product)
        repo._dao.delete(repo.get(removed.id))

        assert cancel_order(customer, order.id).status == "cancelled"
        assert _stock(kept) == 5


class TestCancelRollback:
    def test_failed_restock_leaves_order_pending(self, monkeypatch, customer, make_product, checkout):
        product_a = make_product(name="A", stock=5)
        product_b = make_product(name="B", stock=4)
        order = checkout(customer, (product_a, 2), (product_b, 3))

        restock = cancellation.adjust_stock

        def failing_for_b(product_id, delta):
            if str(product_id) == str(product_b.id) and delta > 0:
                raise RuntimeError("stock store unavailable")
            return restock(product_id, delta)

        monkeypatch.setattr(cancellation, "adjust_stock", failing_for_b)

        with pytest.raises(RuntimeError):
            cancel_order(customer, order.id)

        assert current_domain.repository_for(Order).get(order.id).status == "pending"
        assert (_stock(product_a), _stock(product_b)) == (3, 1)

        monkeypatch.setattr(cancellation, "adjust_stock", restock)
        assert cancel_order(customer, order.id).status == "cancelled"
        assert (_stock(product_a), _stock(product_b)) == (5, 4)
