"""Identity adapter abstraction: pluggable source of the caller's identity."""

import os

from storefront.errors import Forbidden
from storefront.identity.port import Identity

_provider_instance = None


def get_identity_provider():
    """Return the configured identity adapter (singleton).

    Uses the header adapter by default. Select another with the
    IDENTITY_ADAPTER environment variable.
    """
    global _provider_instance
    if _provider_instance is None:
        adapter = os.environ.get("IDENTITY_ADAPTER", "header")
        if adapter == "header":
            from storefront.identity.header_adapter import HeaderIdentityAdapter

            _provider_instance = HeaderIdentityAdapter()
        else:
            raise ValueError(f"Unknown identity adapter: {adapter}")
    return _provider_instance


def reset_identity_provider():
    """Reset the identity adapter singleton (useful for testing)."""
    global _provider_instance
    _provider_instance = None


def require_customer(identity: Identity) -> str:
    if identity.is_anonymous:
        raise Forbidden("Sign in required")
    return identity.customer_id


def authorize_admin(identity: Identity) -> Identity:
    if not identity.is_admin:
        raise Forbidden("Admin access required", details={"customer_id": identity.customer_id})
    return identity
