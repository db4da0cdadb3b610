"""FastAPI routes for the Storefront: catalogue, carts, orders and admin.

Every core call goes through :func:`~storefront.outcome.capture`, so storefront
failures come back as ``{"error", "message", "details"}`` with a stable status
code. Malformed field values raise Protean ``ValidationError`` and are rendered
by the handlers that ``register_exception_handlers`` installs.
"""

from fastapi import APIRouter, Depends

from storefront.api.dependencies import current_identity, render
from storefront.api.schemas import (
    AddCartItemRequest,
    CreateCategoryRequest,
    CreateProductRequest,
    GuestAddItemRequest,
    GuestCartState,
    GuestSetQuantityRequest,
    PlaceOrderRequest,
    SetCartItemQuantityRequest,
    UpdateOrderStatusRequest,
)
from storefront.cart.local import LocalCart
from storefront.cart.persisted import PersistedCart
from storefront.cart.service import add_product, describe_cart
from storefront.catalogue import store
from storefront.identity import authorize_admin
from storefront.identity.port import Identity
from storefront.order.cancellation import cancel_order
from storefront.order.history import all_orders, get_order, order_history
from storefront.order.placement import place_order
from storefront.order.status import update_order_status
from storefront.outcome import capture


def _order_page(page):
    return {
        "orders": [order.to_dict() for order in page.items],
        "pagination": page.pagination("orders"),
    }


def _order_payload(message):
    def serialize(order):
        return {"message": message, "order": order.to_dict(), "order_number": order.order_number}

    return serialize


# ---------------------------------------------------------------------------
# Catalogue Routers
# ---------------------------------------------------------------------------
product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


@product_router.get("")
async def list_products(
    category: str | None = None,
    search: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    sort: str = "newest",
    page: int = 1,
    limit: int | None = None,
):
    outcome = capture(
        store.list_products,
        category=category,
        search=search,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
        page=page,
        page_size=limit,
    )
    return render(outcome, lambda p: {"products": p.items, "pagination": p.pagination("products")})


@product_router.get("/featured")
async def featured_products(limit: int = 8):
    return render(capture(store.featured_products, limit=limit), lambda items: {"products": items})


@product_router.get("/{product_id}")
async def get_product(product_id: str):
    return render(capture(store.product_details, product_id))


def _create_product(identity: Identity, body: CreateProductRequest) -> dict:
    authorize_admin(identity)
    product_id = store.create_product(**body.model_dump())
    return store.product_details(product_id)


@product_router.post("", status_code=201)
async def create_product(body: CreateProductRequest, identity: Identity = Depends(current_identity)):
    return render(capture(_create_product, identity, body), status_code=201)


@category_router.get("")
async def list_categories():
    return render(capture(store.list_categories), lambda items: {"categories": items})


def _create_category(identity: Identity, body: CreateCategoryRequest) -> dict:
    authorize_admin(identity)
    return {"category_id": store.create_category(**body.model_dump())}


@category_router.post("", status_code=201)
async def create_category(body: CreateCategoryRequest, identity: Identity = Depends(current_identity)):
    return render(capture(_create_category, identity, body), status_code=201)


# ---------------------------------------------------------------------------
# Persisted Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _fetch_cart(identity: Identity) -> dict:
    return describe_cart(PersistedCart(identity).fetch())


def _add_to_cart(identity: Identity, product_id: str, quantity: int) -> dict:
    return describe_cart(add_product(PersistedCart(identity), product_id, quantity))


def _set_cart_quantity(identity: Identity, item_id: str, quantity: int) -> dict:
    return describe_cart(PersistedCart(identity).set_quantity(item_id, quantity))


def _remove_from_cart(identity: Identity, item_id: str) -> dict:
    return describe_cart(PersistedCart(identity).remove(item_id))


def _clear_cart(identity: Identity) -> dict:
    return describe_cart(PersistedCart(identity).clear())


@cart_router.get("")
async def view_cart(identity: Identity = Depends(current_identity)):
    return render(capture(_fetch_cart, identity))


@cart_router.post("/items")
async def add_cart_item(body: AddCartItemRequest, identity: Identity = Depends(current_identity)):
    return render(capture(_add_to_cart, identity, body.product_id, body.quantity))


@cart_router.put("/items/{item_id}")
async def set_cart_item_quantity(
    item_id: str, body: SetCartItemQuantityRequest, identity: Identity = Depends(current_identity)
):
    return render(capture(_set_cart_quantity, identity, item_id, body.quantity))


@cart_router.delete("/items/{item_id}")
async def remove_cart_item(item_id: str, identity: Identity = Depends(current_identity)):
    return render(capture(_remove_from_cart, identity, item_id))


@cart_router.delete("")
async def clear_cart(identity: Identity = Depends(current_identity)):
    return render(capture(_clear_cart, identity))


# ---------------------------------------------------------------------------
# Guest Cart Router
# ---------------------------------------------------------------------------
# The client owns guest cart state: it sends the cart with each request and
# keeps the ``cart`` object from the response.
guest_cart_router = APIRouter(prefix="/guest-cart", tags=["guest-cart"])


def _guest_cart(state: GuestCartState) -> LocalCart:
    return LocalCart.from_state(state.model_dump())


def _guest_payload(cart: LocalCart) -> dict:
    return {**describe_cart(cart.view()), "cart": cart.to_state()}


def _guest_add(state: GuestCartState, product_id: str, quantity: int) -> dict:
    cart = _guest_cart(state)
    add_product(cart, product_id, quantity)
    return _guest_payload(cart)


def _guest_set_quantity(state: GuestCartState, item_id: str, quantity: int) -> dict:
    cart = _guest_cart(state)
    cart.set_quantity(item_id, quantity)
    return _guest_payload(cart)


def _guest_remove(state: GuestCartState, item_id: str) -> dict:
    cart = _guest_cart(state)
    cart.remove(item_id)
    return _guest_payload(cart)


def _guest_view(state: GuestCartState) -> dict:
    return _guest_payload(_guest_cart(state))


@guest_cart_router.post("/items")
async def guest_add_item(body: GuestAddItemRequest):
    return render(capture(_guest_add, body.cart, body.product_id, body.quantity))


@guest_cart_router.put("/items/{item_id}")
async def guest_set_quantity(item_id: str, body: GuestSetQuantityRequest):
    return render(capture(_guest_set_quantity, body.cart, item_id, body.quantity))


@guest_cart_router.delete("/items/{item_id}")
async def guest_remove_item(item_id: str, body: GuestCartState):
    return render(capture(_guest_remove, body, item_id))


@guest_cart_router.post("/view")
async def guest_view(body: GuestCartState):
    return render(capture(_guest_view, body))


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201)
async def create_order(body: PlaceOrderRequest, identity: Identity = Depends(current_identity)):
    outcome = capture(
        place_order,
        identity,
        shipping_address=body.shipping_address.model_dump(),
        payment_method=body.payment_method,
    )
    return render(outcome, _order_payload("Order placed successfully"), status_code=201)


@order_router.get("")
async def list_orders(page: int = 1, limit: int | None = None, identity: Identity = Depends(current_identity)):
    return render(capture(order_history, identity, page=page, page_size=limit), _order_page)


@order_router.get("/{order_id}")
async def order_detail(order_id: str, identity: Identity = Depends(current_identity)):
    return render(capture(get_order, identity, order_id), lambda order: order.to_dict())


@order_router.put("/{order_id}/cancel")
async def cancel(order_id: str, identity: Identity = Depends(current_identity)):
    return render(capture(cancel_order, identity, order_id), _order_payload("Order cancelled successfully"))


# ---------------------------------------------------------------------------
# Admin Router
# ---------------------------------------------------------------------------
admin_router = APIRouter(prefix="/admin", tags=["admin"])


def _admin_orders(identity: Identity, status, page, page_size):
    authorize_admin(identity)
    return all_orders(status=status, page=page, page_size=page_size)


def _admin_update_status(identity: Identity, order_id: str, status: str, tracking_number):
    authorize_admin(identity)
    return update_order_status(order_id, status, tracking_number=tracking_number)


@admin_router.get("/orders")
async def admin_list_orders(
    status: str | None = None,
    page: int = 1,
    limit: int | None = None,
    identity: Identity = Depends(current_identity),
):
    return render(capture(_admin_orders, identity, status, page, limit), _order_page)


@admin_router.put("/orders/{order_id}/status")
async def admin_update_status(
    order_id: str, body: UpdateOrderStatusRequest, identity: Identity = Depends(current_identity)
):
    outcome = capture(_admin_update_status, identity, order_id, body.status, body.tracking_number)
    return render(outcome, _order_payload("Order status updated"))
