"""Cart item management: commands and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import ShoppingCart
from storefront.domain import storefront


@storefront.command(part_of="ShoppingCart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255, sanitize=False)
    image = String(max_length=500)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="ShoppingCart")
class SetCartItemQuantity:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)
    quantity = Integer(required=True)  # below 1 removes the item


@storefront.command(part_of="ShoppingCart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    item_id = Identifier(required=True)


@storefront.command(part_of="ShoppingCart")
class ClearCart:
    customer_id = Identifier(required=True)


@storefront.command_handler(part_of=ShoppingCart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        cart.add_item(
            product_id=command.product_id,
            name=command.name,
            image=command.image,
            unit_price=command.unit_price,
            quantity=command.quantity,
        )
        repo.add(cart)
        return str(cart.id)

    @handle(SetCartItemQuantity)
    def set_cart_item_quantity(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        cart.set_quantity(item_id=command.item_id, quantity=command.quantity)
        repo.add(cart)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        cart.remove_item(item_id=command.item_id)
        repo.add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(ShoppingCart)
        cart = repo.for_customer(command.customer_id)
        cart.clear()
        repo.add(cart)
        return str(cart.id)
