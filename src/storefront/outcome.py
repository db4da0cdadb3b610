"""Outcome: value-or-error result returned to callers of the core.

Callers at the boundary (the HTTP routes, the management CLI) run core
operations through :func:`capture` and never see a storefront exception: they
get either the operation's value or the typed error that stopped it.
"""

from dataclasses import dataclass
from typing import Any, Callable

import structlog
from protean.exceptions import ObjectNotFoundError

from storefront.errors import NotFound, StorefrontError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Outcome:
    value: Any = None
    error: StorefrontError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> str | None:
        return self.error.kind if self.error else None


def capture(operation: Callable, *args, **kwargs) -> Outcome:
    """Run ``operation`` and fold any storefront failure into an Outcome."""
    name = getattr(operation, "__name__", repr(operation))
    try:
        return Outcome(value=operation(*args, **kwargs))
    except StorefrontError as exc:
        logger.info("Operation rejected", operation=name, kind=exc.kind, **exc.details)
        return Outcome(error=exc)
    except ObjectNotFoundError as exc:
        logger.info("Operation rejected", operation=name, kind=NotFound.kind)
        return Outcome(error=NotFound("Record", str(exc)))
