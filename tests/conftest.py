import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    from storefront.identity import reset_identity_provider

    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    reset_identity_provider()
    ctx.pop()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_product():
    """Create and persist a product, returning it."""
    from protean import current_domain
    from storefront.catalogue.product import Product

    def _make(name="Test Product", price=10.0, stock=10, **fields):
        product = Product.create(name=name, price=price, stock=stock, **fields)
        current_domain.repository_for(Product).add(product)
        return product

    return _make


@pytest.fixture()
def customer():
    from storefront.identity.port import Identity

    return Identity(customer_id="cust-001")


@pytest.fixture()
def other_customer():
    from storefront.identity.port import Identity

    return Identity(customer_id="cust-002")


@pytest.fixture()
def admin():
    from storefront.identity.port import Identity

    return Identity(customer_id="admin-001", role="admin")


@pytest.fixture()
def shipping_address():
    return {
        "full_name": "Jane Smith",
        "street": "456 Oak Avenue",
        "city": "Los Angeles",
        "state": "CA",
        "postal_code": "90210",
        "country": "US",
        "phone": "+1987654321",
    }
