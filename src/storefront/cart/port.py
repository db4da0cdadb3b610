"""Cart contract shared by the guest (local) and persisted cart variants.

Both variants expose the same five operations and answer every one of them
with a :class:`CartView`, so callers never branch on which kind of cart they
hold.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from storefront.cart.totals import compute_totals
from storefront.catalogue.snapshot import ProductSnapshot
from storefront.pricing.calculator import PriceBreakdown, quote


@dataclass(frozen=True)
class CartLine:
    item_id: str
    product_id: str
    name: str
    unit_price: Decimal
    quantity: int
    image: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.item_id,
            "product_id": self.product_id,
            "name": self.name,
            "image": self.image,
            "price": float(self.unit_price),
            "quantity": self.quantity,
        }


@dataclass(frozen=True)
class CartView:
    """Read-only state of a cart with totals derived from its lines."""

    items: tuple[CartLine, ...] = ()
    total_items: int = 0
    total_amount: Decimal = Decimal("0")
    cart_id: str | None = None

    @classmethod
    def of(cls, lines, cart_id=None) -> "CartView":
        lines = tuple(lines)
        total_items, total_amount = compute_totals(lines)
        return cls(items=lines, total_items=total_items, total_amount=total_amount, cart_id=cart_id)

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def pricing(self) -> PriceBreakdown | None:
        return None if self.is_empty else quote(self.total_amount)

    def line(self, item_id) -> CartLine | None:
        return next((line for line in self.items if line.item_id == str(item_id)), None)

    def line_for_product(self, product_id) -> CartLine | None:
        return next((line for line in self.items if line.product_id == str(product_id)), None)

    def to_dict(self) -> dict:
        pricing = self.pricing
        return {
            "id": self.cart_id,
            "items": [line.to_dict() for line in self.items],
            "total_items": self.total_items,
            "total_amount": float(self.total_amount),
            "pricing": pricing.as_floats() if pricing else None,
        }


class CartPort(ABC):
    @abstractmethod
    def add(self, snapshot: ProductSnapshot, quantity: int = 1) -> CartView:
        """Add ``quantity`` units of a product, merging with an existing line."""

    @abstractmethod
    def set_quantity(self, item_id, quantity: int) -> CartView:
        """Overwrite a line's quantity; below 1 removes the line."""

    @abstractmethod
    def remove(self, item_id) -> CartView:
        """Remove a line. Removing an absent line is not an error."""

    @abstractmethod
    def clear(self) -> CartView:
        """Remove every line."""

    @abstractmethod
    def view(self) -> CartView:
        """Current cart state."""
