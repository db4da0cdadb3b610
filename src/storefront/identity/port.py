"""Identity port: who is calling, as established by the upstream auth layer.

The storefront never authenticates anyone. An adapter turns whatever the
auth layer hands over (request headers by default) into an :class:`Identity`.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import ClassVar

ADMIN_ROLE = "admin"
CUSTOMER_ROLE = "customer"


@dataclass(frozen=True)
class Identity:
    customer_id: str | None = None
    role: str = CUSTOMER_ROLE

    ANONYMOUS: ClassVar["Identity"]

    @property
    def is_anonymous(self) -> bool:
        return not self.customer_id

    @property
    def is_admin(self) -> bool:
        return not self.is_anonymous and self.role == ADMIN_ROLE


Identity.ANONYMOUS = Identity()


class IdentityPort(ABC):
    """Abstract interface for identity adapters."""

    @abstractmethod
    def current_identity(self, headers: Mapping[str, str]) -> Identity:
        """Identity of the caller, or ``Identity.ANONYMOUS``."""
        ...
