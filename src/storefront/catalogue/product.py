"""Product aggregate root.

Products are read by every other part of the storefront but only ever written
in two ways: created by an administrator, and stock-adjusted through
:meth:`ProductRepository.adjust_stock`. Stock is never negative.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Integer, String, Text

from storefront.catalogue.events import ProductCreated, StockAdjusted
from storefront.catalogue.snapshot import ProductSnapshot
from storefront.domain import storefront
from storefront.errors import InsufficientStock
from storefront.pricing.calculator import to_decimal


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255, sanitize=False)
    description = Text()
    price = Float(required=True, min_value=0.01)
    stock = Integer(default=0, min_value=0)
    category = String(max_length=100, sanitize=False)
    brand = String(max_length=100, sanitize=False)
    rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    num_reviews = Integer(default=0, min_value=0)
    images = Text()  # JSON array of URLs, primary image first
    featured = Boolean(default=False)
    is_active = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def stock_cannot_be_negative(self):
        if self.stock is not None and self.stock < 0:
            raise ValidationError({"stock": ["Stock cannot be negative"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        stock=0,
        description=None,
        category=None,
        brand=None,
        images=None,
        rating=0.0,
        num_reviews=0,
        featured=False,
    ):
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            price=float(to_decimal(price)),
            stock=stock,
            category=category,
            brand=brand,
            images=json.dumps(list(images or [])),
            rating=rating,
            num_reviews=num_reviews,
            featured=featured,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                name=name,
                price=product.price,
                stock=stock,
                category=category,
            )
        )
        return product

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    @property
    def primary_image(self) -> str | None:
        urls = self.image_urls
        return urls[0] if urls else None

    def adjust_stock(self, delta: int) -> int:
        """Apply ``delta`` to the stock counter, refusing to go below zero."""
        new_stock = self.stock + delta
        if new_stock < 0:
            raise InsufficientStock(str(self.id), requested=-delta, available=self.stock, name=self.name)

        previous_stock = self.stock
        self.stock = new_stock
        self.updated_at = datetime.now(UTC)

        self.raise_(
            StockAdjusted(
                product_id=str(self.id),
                previous_stock=previous_stock,
                new_stock=new_stock,
                delta=delta,
            )
        )
        return new_stock

    def snapshot(self) -> ProductSnapshot:
        return ProductSnapshot(
            product_id=str(self.id),
            name=self.name,
            price=to_decimal(self.price),
            image=self.primary_image,
            stock=self.stock,
        )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "stock": self.stock,
            "category": self.category,
            "brand": self.brand,
            "rating": self.rating,
            "num_reviews": self.num_reviews,
            "images": self.image_urls,
            "featured": self.featured,
            "is_active": self.is_active,
        }
