"""Pydantic request schemas for the Storefront API.

These are external contracts, kept separate from the internal Protean
commands. Responses are plain JSON built from the domain objects.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str
    description: str | None = None
    price: float = Field(gt=0)
    stock: int = Field(ge=0, default=0)
    category: str | None = None
    brand: str | None = None
    images: list[str] = Field(default_factory=list)
    featured: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Yoga Mat Premium",
                    "price": 49.99,
                    "stock": 85,
                    "category": "Sports & Fitness",
                    "brand": "ZenFit",
                }
            ]
        }
    }


class CreateCategoryRequest(BaseModel):
    name: str
    description: str | None = None
    image: str | None = None


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddCartItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, default=1)


class SetCartItemQuantityRequest(BaseModel):
    quantity: int  # below 1 removes the item


class GuestCartItem(BaseModel):
    id: str | None = None
    product_id: str
    name: str = ""
    image: str | None = None
    price: float = Field(ge=0)
    quantity: int


class GuestCartState(BaseModel):
    """Guest cart as held by the client between requests."""

    items: list[GuestCartItem] = Field(default_factory=list)


class GuestAddItemRequest(AddCartItemRequest):
    cart: GuestCartState = Field(default_factory=GuestCartState)


class GuestSetQuantityRequest(SetCartItemQuantityRequest):
    cart: GuestCartState = Field(default_factory=GuestCartState)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class ShippingAddressSchema(BaseModel):
    full_name: str
    street: str
    city: str
    state: str | None = None
    postal_code: str
    country: str
    phone: str | None = None


class PlaceOrderRequest(BaseModel):
    shipping_address: ShippingAddressSchema
    payment_method: str = Field(min_length=1, max_length=50)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "shipping_address": {
                        "full_name": "Jane Smith",
                        "street": "456 Oak Avenue",
                        "city": "Los Angeles",
                        "state": "CA",
                        "postal_code": "90210",
                        "country": "US",
                        "phone": "+1987654321",
                    },
                    "payment_method": "credit_card",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    status: str
    tracking_number: str | None = None
