"""Guest cart held in the caller's session state.

A ``LocalCart`` is never persisted. The session layer rebuilds it from a plain
dict on each request with :meth:`LocalCart.from_state` and stores
:meth:`LocalCart.to_state` back when the request is done.
"""

from dataclasses import replace
from uuid import uuid4

from protean.exceptions import ValidationError

from storefront.cart.port import CartLine, CartPort, CartView
from storefront.catalogue.snapshot import ProductSnapshot
from storefront.pricing.calculator import to_decimal


def _local_id() -> str:
    return f"local-{uuid4().hex[:12]}"


class LocalCart(CartPort):
    def __init__(self, lines=None):
        self._lines: list[CartLine] = list(lines or [])

    @classmethod
    def from_state(cls, state: dict | None) -> "LocalCart":
        lines = []
        for item in (state or {}).get("items", []):
            quantity = int(item["quantity"])
            if quantity < 1:
                continue
            lines.append(
                CartLine(
                    item_id=str(item.get("id") or _local_id()),
                    product_id=str(item["product_id"]),
                    name=item.get("name", ""),
                    image=item.get("image"),
                    unit_price=to_decimal(item["price"]),
                    quantity=quantity,
                )
            )
        return cls(lines)

    def to_state(self) -> dict:
        view = self.view()
        return {
            "items": [line.to_dict() for line in view.items],
            "total_items": view.total_items,
            "total_amount": float(view.total_amount),
        }

    def add(self, snapshot: ProductSnapshot, quantity: int = 1) -> CartView:
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        for index, line in enumerate(self._lines):
            if line.product_id == str(snapshot.product_id):
                self._lines[index] = replace(line, quantity=line.quantity + quantity)
                return self.view()

        self._lines.append(
            CartLine(
                item_id=_local_id(),
                product_id=str(snapshot.product_id),
                name=snapshot.name,
                image=snapshot.image,
                unit_price=to_decimal(snapshot.price),
                quantity=quantity,
            )
        )
        return self.view()

    def set_quantity(self, item_id, quantity: int) -> CartView:
        if quantity < 1:
            return self.remove(item_id)

        self._lines = [
            replace(line, quantity=quantity) if line.item_id == str(item_id) else line for line in self._lines
        ]
        return self.view()

    def remove(self, item_id) -> CartView:
        self._lines = [line for line in self._lines if line.item_id != str(item_id)]
        return self.view()

    def clear(self) -> CartView:
        self._lines = []
        return self.view()

    def view(self) -> CartView:
        return CartView.of(self._lines)
