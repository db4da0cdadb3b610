"""FastAPI dependencies shared by the storefront routers."""

from fastapi import Request
from fastapi.responses import JSONResponse

from storefront.identity import get_identity_provider
from storefront.identity.port import Identity
from storefront.outcome import Outcome


def current_identity(request: Request) -> Identity:
    return get_identity_provider().current_identity(request.headers)


def render(outcome: Outcome, serialize=None, status_code: int = 200) -> JSONResponse:
    """JSON response for an outcome: the serialized value, or the error body."""
    if not outcome.ok:
        return JSONResponse(status_code=outcome.error.status_code, content=outcome.error.to_dict())

    content = serialize(outcome.value) if serialize else outcome.value
    return JSONResponse(status_code=status_code, content=content)
