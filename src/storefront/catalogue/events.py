"""Domain events for the catalogue aggregates."""

from protean.fields import Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A new product was added to the catalogue."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True, sanitize=False)
    price = Float(required=True)
    stock = Integer(required=True)
    category = String(sanitize=False)


@storefront.event(part_of="Product")
class StockAdjusted:
    """A product's stock counter moved by ``delta`` units."""

    __version__ = 1

    product_id = Identifier(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    delta = Integer(required=True)


@storefront.event(part_of="Category")
class CategoryCreated:
    """A new product category was defined."""

    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True, sanitize=False)
