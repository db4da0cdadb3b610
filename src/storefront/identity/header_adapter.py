"""Header identity adapter: trusts identity headers set by the auth gateway."""

from collections.abc import Mapping

from storefront.identity.port import CUSTOMER_ROLE, Identity, IdentityPort

CUSTOMER_ID_HEADER = "x-customer-id"
CUSTOMER_ROLE_HEADER = "x-customer-role"


class HeaderIdentityAdapter(IdentityPort):
    def current_identity(self, headers: Mapping[str, str]) -> Identity:
        normalized = {key.lower(): value for key, value in headers.items()}
        customer_id = (normalized.get(CUSTOMER_ID_HEADER) or "").strip()
        if not customer_id:
            return Identity.ANONYMOUS

        role = (normalized.get(CUSTOMER_ROLE_HEADER) or CUSTOMER_ROLE).strip().lower()
        return Identity(customer_id=customer_id, role=role)
