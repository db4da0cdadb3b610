"""Point-in-time copy of the product fields carts and orders depend on."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class ProductSnapshot:
    product_id: str
    name: str
    price: Decimal
    image: str | None = None
    stock: int = 0
