"""
api/routes/auth.py -- Public authentication endpoints.

Routes:
  POST /api/login     -- email/password login; returns user summary + bearer token
  POST /api/register  -- create a standard account; returns user summary + bearer token

Both routes are public (no Authorization header). Logout has no endpoint:
tokens are stateless, so the client simply discards its copy.

Security:
  auth.service.login() equalizes both the message and the timing for an
  unknown email versus a wrong password -- call it, never inline the lookup.
  Cache-Control: no-store on both responses, since the body carries a token.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.models import AuthResponse, ErrorResponse, LoginRequest, RegisterRequest, UserOut
from auth import service
from auth.models import AuthResult
from auth.store import UserStore

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
}


def _auth_response(result: AuthResult, status_code: int) -> JSONResponse:
    resp = JSONResponse(
        status_code=status_code,
        content=AuthResponse(user=UserOut.from_summary(result.user), token=result.token).model_dump(),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/login", response_model=AuthResponse, responses=_ERRORS)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with email and password.

    Returns the same 401 "invalid email or password" for an unknown email and
    a wrong password to avoid leaking which emails are registered.
    """
    user_store: UserStore = request.app.state.user_store
    result = service.login(user_store, body.email, body.password)
    return _auth_response(result, 200)


@router.post("/register", response_model=AuthResponse, status_code=201, responses=_ERRORS)
def register(request: Request, body: RegisterRequest) -> JSONResponse:
    """Create an account with the default role and status, then log it in."""
    user_store: UserStore = request.app.state.user_store
    result = service.register(user_store, body.name, body.email, body.password)
    return _auth_response(result, 201)
