"""Storefront FastAPI application.

Serves the catalogue, both cart variants and orders over HTTP. Every request
runs inside the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml when one is present.
import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.domain import storefront
from storefront.errors import StorefrontError
from storefront.utils.logging import bind_request_context, clear_request_context, configure_logging

configure_logging()
storefront.init()

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Storefront API",
    description="Catalogue, carts, checkout and order history",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the storefront domain context and bind request details to the log context."""
    bind_request_context(method=request.method, path=request.url.path)
    try:
        with storefront.domain_context():
            response = await call_next(request)
        return response
    finally:
        clear_request_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from storefront.api import (  # noqa: E402
    admin_router,
    cart_router,
    category_router,
    guest_cart_router,
    order_router,
    product_router,
)

app.include_router(product_router)
app.include_router(category_router)
app.include_router(cart_router)
app.include_router(guest_cart_router)
app.include_router(order_router)
app.include_router(admin_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": storefront.name}})
