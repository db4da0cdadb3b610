"""Shopping Cart aggregate: the server-side cart, one per customer.

Lines carry the product name, image and unit price as they were when the
product was added. ``total_items`` and ``total_amount`` are recomputed from
the full line collection after every change.
"""

from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import CartCleared, CartItemAdded, CartItemQuantityChanged, CartItemRemoved
from storefront.cart.port import CartLine, CartView
from storefront.cart.totals import compute_totals
from storefront.domain import storefront
from storefront.pricing.calculator import to_decimal


@storefront.entity(part_of="ShoppingCart")
class CartItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255, sanitize=False)
    image = String(max_length=500)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()

    def to_line(self) -> CartLine:
        return CartLine(
            item_id=str(self.id),
            product_id=str(self.product_id),
            name=self.name,
            image=self.image,
            unit_price=to_decimal(self.unit_price),
            quantity=self.quantity,
        )


@storefront.aggregate
class ShoppingCart:
    customer_id = Identifier(required=True)
    items = HasMany(CartItem)
    total_items = Integer(default=0)
    total_amount = Float(default=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, customer_id):
        now = datetime.now(UTC)
        return cls(customer_id=customer_id, created_at=now, updated_at=now)

    def lines(self) -> list[CartLine]:
        return [item.to_line() for item in self.items]

    def view(self) -> CartView:
        return CartView.of(self.lines(), cart_id=str(self.id))

    def _find(self, item_id):
        return next((i for i in self.items if str(i.id) == str(item_id)), None)

    def _recompute_totals(self):
        total_items, total_amount = compute_totals(self.lines())
        self.total_items = total_items
        self.total_amount = float(total_amount)
        self.updated_at = datetime.now(UTC)

    def add_item(self, product_id, name, unit_price, quantity=1, image=None):
        """Add a product, or grow its line when it is already in the cart."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = next((i for i in self.items if str(i.product_id) == str(product_id)), None)
        if existing:
            existing.quantity += quantity
            item_id = str(existing.id)
        else:
            item = CartItem(
                product_id=str(product_id),
                name=name,
                image=image,
                unit_price=float(to_decimal(unit_price)),
                quantity=quantity,
                added_at=datetime.now(UTC),
            )
            self.add_items(item)
            item_id = str(item.id)

        self._recompute_totals()
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                item_id=item_id,
                product_id=str(product_id),
                quantity=quantity,
            )
        )

    def set_quantity(self, item_id, quantity):
        """Overwrite a line's quantity. Below 1 removes it; unknown ids are ignored."""
        if quantity < 1:
            self.remove_item(item_id)
            return

        item = self._find(item_id)
        if item is None:
            return

        previous_quantity = item.quantity
        item.quantity = quantity
        self._recompute_totals()
        self.raise_(
            CartItemQuantityChanged(
                cart_id=str(self.id),
                item_id=str(item_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def remove_item(self, item_id):
        item = self._find(item_id)
        if item is None:
            return

        self.remove_items(item)
        self._recompute_totals()
        self.raise_(CartItemRemoved(cart_id=str(self.id), item_id=str(item_id)))

    def clear(self):
        removed = len(self.items)
        for item in list(self.items):
            self.remove_items(item)

        self._recompute_totals()
        self.raise_(
            CartCleared(
                cart_id=str(self.id),
                customer_id=str(self.customer_id),
                items_removed=removed,
            )
        )
