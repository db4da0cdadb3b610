"""Catalogue read and stock interface used by carts, checkout and the API."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.creation import CreateCategory, CreateProduct
from storefront.catalogue.product import Product
from storefront.catalogue.snapshot import ProductSnapshot
from storefront.errors import NotFound
from storefront.pricing.calculator import to_decimal
from storefront.utils.pagination import Page, clamp


def _load(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        raise NotFound("Product", str(product_id)) from None


def find_product(product_id) -> Product | None:
    """The live product record, or ``None`` when it has been removed."""
    try:
        return current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        return None


def get_product(product_id) -> ProductSnapshot:
    return _load(product_id).snapshot()


def product_details(product_id) -> dict:
    return _load(product_id).to_dict()


def adjust_stock(product_id, delta: int) -> int:
    """Move a product's stock by ``delta``; raises InsufficientStock or NotFound."""
    try:
        return current_domain.repository_for(Product).adjust_stock(product_id, delta)
    except ObjectNotFoundError:
        raise NotFound("Product", str(product_id)) from None


def list_products(
    category=None,
    search=None,
    min_price=None,
    max_price=None,
    sort="newest",
    page=1,
    page_size=None,
) -> Page:
    page, page_size = clamp(page, page_size)
    if min_price is not None:
        min_price = to_decimal(min_price)
    if max_price is not None:
        max_price = to_decimal(max_price)

    results = current_domain.repository_for(Product).search(
        category=category,
        search=search,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
        offset=(page - 1) * page_size,
        limit=page_size,
    )
    return Page(
        items=[product.to_dict() for product in results.items],
        total=results.total,
        page=page,
        page_size=page_size,
    )


def featured_products(limit=8) -> list[dict]:
    return [product.to_dict() for product in current_domain.repository_for(Product).featured(limit=limit)]


def list_categories() -> list[dict]:
    return [category.to_dict() for category in current_domain.repository_for(Category).find_active()]


def create_product(**fields) -> str:
    return current_domain.process(CreateProduct(**fields), asynchronous=False)


def create_category(**fields) -> str:
    return current_domain.process(CreateCategory(**fields), asynchronous=False)
