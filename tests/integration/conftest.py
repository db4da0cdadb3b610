"""Fixtures for HTTP-level tests of the storefront routers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from protean.integrations.fastapi import register_exception_handlers
from storefront.api import (
    admin_router,
    cart_router,
    category_router,
    guest_cart_router,
    order_router,
    product_router,
)


@pytest.fixture()
def client():
    app = FastAPI()
    register_exception_handlers(app)
    for router in (product_router, category_router, cart_router, guest_cart_router, order_router, admin_router):
        app.include_router(router)
    return TestClient(app)


@pytest.fixture()
def as_customer():
    return {"X-Customer-Id": "cust-001"}


@pytest.fixture()
def as_other_customer():
    return {"X-Customer-Id": "cust-002"}


@pytest.fixture()
def as_admin():
    return {"X-Customer-Id": "admin-001", "X-Customer-Role": "admin"}
