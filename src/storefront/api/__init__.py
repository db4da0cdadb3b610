"""Storefront API package."""

from storefront.api.routes import (
    admin_router,
    cart_router,
    category_router,
    guest_cart_router,
    order_router,
    product_router,
)

__all__ = [
    "product_router",
    "category_router",
    "cart_router",
    "guest_cart_router",
    "order_router",
    "admin_router",
]
