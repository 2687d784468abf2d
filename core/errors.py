"""
core/errors.py -- Application error taxonomy.

Every failure the service reports to a client is one of these classes. Each
carries the HTTP status it maps to and a client-safe message; api/main.py
renders them all into the same {"success": false, "message": ...} envelope.

Services raise these; they never construct HTTP responses themselves. That
keeps auth/ and inventory/ usable (and testable) without FastAPI in the loop.

Layer rule: core/ is the kernel. No imports from api/, auth/, inventory/, or db/.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for errors with a defined client-facing status and message."""

    status_code: int = 500
    default_message: str = "internal error"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input. Resolved before any store call."""

    status_code = 400
    default_message = "invalid request"


class AuthError(AppError):
    """Bad credentials at login.

    One message for every cause (unknown email, wrong password, inactive
    account) so the response never reveals whether an email is registered.
    """

    status_code = 401
    default_message = "invalid email or password"


class Unauthenticated(AppError):
    """Missing, invalid, or expired bearer token on a protected route."""

    status_code = 401
    default_message = "access token required"


class ConflictError(AppError):
    """Duplicate email at registration."""

    status_code = 400
    default_message = "email already in use"


class NotFound(AppError):
    """Resource absent or owned by someone else -- the two are indistinguishable."""

    status_code = 404
    default_message = "not found"


class InternalError(AppError):
    """Persistence or unexpected failure. Detail goes to the log, not the client."""

    status_code = 500
    default_message = "internal error"
