"""Catalogue administration: product and category creation commands."""

from protean import handle
from protean.fields import Boolean, Float, Integer, List, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product
from storefront.domain import logger, storefront


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=255, sanitize=False)
    description = Text()
    price = Float(required=True, min_value=0.01)
    stock = Integer(default=0, min_value=0)
    category = String(max_length=100, sanitize=False)
    brand = String(max_length=100, sanitize=False)
    images = List(content_type=String)
    rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    num_reviews = Integer(default=0, min_value=0)
    featured = Boolean(default=False)


@storefront.command(part_of="Category")
class CreateCategory:
    name = String(required=True, max_length=100, sanitize=False)
    description = Text()
    image = String(max_length=500)


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            price=command.price,
            stock=command.stock,
            description=command.description,
            category=command.category,
            brand=command.brand,
            images=command.images,
            rating=command.rating,
            num_reviews=command.num_reviews,
            featured=command.featured,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), name=product.name)
        return str(product.id)


@storefront.command_handler(part_of=Category)
class CreateCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        category = Category.create(
            name=command.name,
            description=command.description,
            image=command.image,
        )
        current_domain.repository_for(Category).add(category)
        return str(category.id)
