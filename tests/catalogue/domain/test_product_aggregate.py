"""Tests for the Product aggregate."""

from decimal import Decimal

import pytest
from protean.exceptions import ValidationError
from storefront.catalogue.category import Category
from storefront.catalogue.events import CategoryCreated, ProductCreated, StockAdjusted
from storefront.catalogue.product import Product
from storefront.catalogue.snapshot import ProductSnapshot
from storefront.errors import InsufficientStock


def _make_product(**overrides):
    fields = {"name": "Yoga Mat", "price": 49.99, "stock": 5, "images": ["a.jpg", "b.jpg"]}
    fields.update(overrides)
    return Product.create(**fields)


class TestProductCreation:
    def test_create_sets_fields(self):
        product = _make_product(category="Sports & Fitness", brand="ZenFit")
        assert product.name == "Yoga Mat"
        assert product.price == 49.99
        assert product.stock == 5
        assert product.category == "Sports & Fitness"
        assert product.is_active is True
        assert product.featured is False
        assert product.created_at is not None

    def test_create_raises_event(self):
        product = _make_product()
        events = [e for e in product._events if isinstance(e, ProductCreated)]
        assert len(events) == 1
        assert events[0].name == "Yoga Mat"
        assert events[0].stock == 5

    def test_images_keep_their_order(self):
        product = _make_product()
        assert product.image_urls == ["a.jpg", "b.jpg"]
        assert product.primary_image == "a.jpg"

    def test_product_without_images(self):
        product = _make_product(images=None)
        assert product.image_urls == []
        assert product.primary_image is None

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            _make_product(price=0)

    def test_stock_cannot_start_negative(self):
        with pytest.raises(ValidationError):
            _make_product(stock=-1)


class TestAdjustStock:
    def test_decrement(self):
        product = _make_product(stock=5)
        assert product.adjust_stock(-2) == 3
        assert product.stock == 3

    def test_increment(self):
        product = _make_product(stock=5)
        assert product.adjust_stock(4) == 9

    def test_decrement_to_zero(self):
        product = _make_product(stock=2)
        assert product.adjust_stock(-2) == 0

    def test_decrement_below_zero_is_rejected(self):
        product = _make_product(stock=1)
        with pytest.raises(InsufficientStock) as exc:
            product.adjust_stock(-2)
        assert exc.value.details == {"product_id": str(product.id), "requested": 2, "available": 1}
        assert product.stock == 1

    def test_adjust_raises_event(self):
        product = _make_product(stock=5)
        product._events.clear()
        product.adjust_stock(-3)
        assert len(product._events) == 1
        event = product._events[0]
        assert isinstance(event, StockAdjusted)
        assert event.previous_stock == 5
        assert event.new_stock == 2
        assert event.delta == -3


class TestSnapshot:
    def test_snapshot_copies_current_fields(self):
        product = _make_product(price=19.99, stock=7)
        snapshot = product.snapshot()
        assert snapshot == ProductSnapshot(
            product_id=str(product.id),
            name="Yoga Mat",
            price=Decimal("19.99"),
            image="a.jpg",
            stock=7,
        )

    def test_snapshot_is_independent_of_later_changes(self):
        product = _make_product(stock=7)
        snapshot = product.snapshot()
        product.adjust_stock(-7)
        assert snapshot.stock == 7


class TestCategory:
    def test_create_category(self):
        category = Category.create(name="Books", description="Books and educational materials")
        assert category.name == "Books"
        assert category.is_active is True
        events = [e for e in category._events if isinstance(e, CategoryCreated)]
        assert events[0].name == "Books"
