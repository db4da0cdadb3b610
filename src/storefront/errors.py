"""Storefront error kinds.

Every failure the core reports to a caller is one of the classes below. Each
carries a stable ``kind`` (what the HTTP layer and clients switch on) and the
status code the API answers with.
"""


class StorefrontError(Exception):
    """Base class for every recoverable storefront failure.

    Attributes:
        message: Human-readable error message
        details: Additional context (entity ids, quantities, states)
    """

    kind = "StorefrontError"
    status_code = 400

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message, "details": self.details}


class InvalidAmount(StorefrontError):
    """A monetary amount is malformed, non-finite or negative."""

    kind = "InvalidAmount"
    status_code = 422

    def __init__(self, value):
        super().__init__(f"Invalid amount: {value!r}", details={"value": str(value)})
        self.value = value


class EmptyCart(StorefrontError):
    """Checkout was attempted with no items in the cart."""

    kind = "EmptyCart"
    status_code = 400

    def __init__(self, customer_id: str):
        super().__init__("Cart is empty", details={"customer_id": customer_id})
        self.customer_id = customer_id


class InsufficientStock(StorefrontError):
    """Requested quantity exceeds what the catalogue holds."""

    kind = "InsufficientStock"
    status_code = 409

    def __init__(self, product_id: str, requested: int, available: int, name: str | None = None):
        label = name or product_id
        super().__init__(
            f"Insufficient stock for {label}. Available: {available}",
            details={"product_id": product_id, "requested": requested, "available": available},
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available


class NotFound(StorefrontError):
    """The referenced product, cart item or order does not exist."""

    kind = "NotFound"
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} {entity_id} not found", details={"entity": entity, "id": entity_id})
        self.entity = entity
        self.entity_id = entity_id


class Forbidden(StorefrontError):
    """The caller's identity may not perform the operation."""

    kind = "Forbidden"
    status_code = 403

    def __init__(self, reason: str = "Access denied", details: dict | None = None):
        super().__init__(reason, details=details)


class InvalidTransition(StorefrontError):
    """The order's current status does not allow the requested change."""

    kind = "InvalidTransition"
    status_code = 409

    def __init__(self, order_id: str, current_status: str, target_status: str):
        super().__init__(
            f"Order cannot move from {current_status} to {target_status}",
            details={"order_id": order_id, "current_status": current_status, "target_status": target_status},
        )
        self.order_id = order_id
        self.current_status = current_status
        self.target_status = target_status
