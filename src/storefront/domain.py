"""Storefront domain: catalogue, shopping carts, checkout and order history.

A single Protean domain holds every aggregate so that checkout can touch
products, carts and orders in one logical operation.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
