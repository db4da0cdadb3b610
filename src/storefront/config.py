"""Runtime settings read from the environment.

Every value has a default that matches the storefront's published policy, so
the application runs without any configuration.
"""

import os
from decimal import Decimal


def _decimal(name: str, default: str) -> Decimal:
    return Decimal(os.environ.get(name, default))


def _int(name: str, default: int) -> int:
    return int(os.environ.get(name, default))


# Pricing
FREE_SHIPPING_THRESHOLD = _decimal("FREE_SHIPPING_THRESHOLD", "50.00")
FLAT_SHIPPING_FEE = _decimal("FLAT_SHIPPING_FEE", "5.99")
TAX_RATE = _decimal("TAX_RATE", "0.08")
CURRENCY = os.environ.get("CURRENCY", "USD")

# Orders
ESTIMATED_DELIVERY_DAYS = _int("ESTIMATED_DELIVERY_DAYS", 7)

# Catalogue
LOW_STOCK_THRESHOLD = _int("LOW_STOCK_THRESHOLD", 10)

# Pagination
DEFAULT_PAGE_SIZE = _int("DEFAULT_PAGE_SIZE", 10)
ADMIN_PAGE_SIZE = _int("ADMIN_PAGE_SIZE", 20)
MAX_PAGE_SIZE = _int("MAX_PAGE_SIZE", 100)
