"""
auth/dependencies.py -- FastAPI Depends() helper for the Authorization Guard.

Only one auth method exists: an `Authorization: Bearer <token>` header.
The verified token is the sole source of truth for who is calling; the user
store is not consulted, so a protected request costs no extra query.

  missing/garbled header  -> Unauthenticated, 401 "access token required"
  bad signature / expired -> Unauthenticated, 403 "invalid or expired token"

Layer rule: no imports from api/ or inventory/.
  auth/dependencies.py may import from fastapi (for Request) because this
  module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

import logging

from fastapi import Request

from auth.models import Identity
from auth.tokens import TokenError, verify_token
from core.errors import Unauthenticated

logger = logging.getLogger("autogiro.auth")

_BEARER_PREFIX = "bearer "


def extract_bearer_token(header_value: str | None) -> str | None:
    """Return the token from an Authorization header value, or None."""
    if not header_value:
        return None
    if header_value[: len(_BEARER_PREFIX)].lower() != _BEARER_PREFIX:
        return None
    token = header_value[len(_BEARER_PREFIX) :].strip()
    return token or None


def get_current_identity(request: Request) -> Identity:
    """Require a valid bearer token and return the caller's identity.

    Use as a router-level dependency so no handler can forget it:
        router = APIRouter(dependencies=[Depends(get_current_identity)])
    and again as a parameter where the handler needs the identity:
        def route(identity: Identity = Depends(get_current_identity)): ...
    FastAPI caches the result per request, so the token is verified once.
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    if token is None:
        raise Unauthenticated("access token required", status_code=401)

    result = verify_token(token)
    if isinstance(result, TokenError):
        logger.info("Rejected bearer token on %s %s: %s", request.method, request.url.path, result.reason)
        raise Unauthenticated("invalid or expired token", status_code=403)
    return result.identity
