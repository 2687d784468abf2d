"""
auth/tokens.py -- Bearer token issue and verification.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with SECRET_KEY and carry
       the user id, email, issued-at and expiry. They are self-contained and
       stateless -- there is no server-side revocation list, and logout is a
       client-side discard.

  Verification returns a result object (TokenOk | TokenError) instead of
       raising. The Authorization Guard turns every TokenError into the same
       Unauthenticated response; TokenError.reason exists for the log only.

  Expiry is checked here against an explicit clock rather than inside
       jose.jwt.decode(). Callers (and tests) can pass `now` to evaluate a
       token at any instant; production callers leave it as None.

  SECRET_KEY: sourced from core.config.get_settings(). Production refuses to
       start without one; dev mode auto-generates a random key.

Layer rule: no imports from api/, inventory/, or db/. Import from core/ is
allowed -- core/ is the kernel and has no reverse dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union

from jose import JWTError, jwt

from auth.models import Identity
from core.config import get_settings

_ALGORITHM = "HS256"

# Failure reasons. Diagnostic only -- all four produce the same HTTP response.
MALFORMED = "malformed"
BAD_SIGNATURE = "bad_signature"
EXPIRED = "expired"
MISSING_CLAIMS = "missing_claims"


@dataclass(frozen=True)
class TokenOk:
    identity: Identity
    issued_at: int
    expires_at: int


@dataclass(frozen=True)
class TokenError:
    reason: str


TokenResult = Union[TokenOk, TokenError]


def _timestamp(now: datetime | None) -> int:
    return int((now or datetime.now(timezone.utc)).timestamp())


def issue_token(user_id: int, email: str, now: datetime | None = None, expire_seconds: int = 0) -> str:
    """Encode a signed JWT for the given identity.

    Args:
        user_id:        Numeric user ID stored in the DB.
        email:          Normalized login email.
        now:            Issue instant. Defaults to the current UTC time.
        expire_seconds: Lifetime in seconds. If 0 (default), uses
                        Settings.token_expire_seconds (24 hours).
    """
    settings = get_settings()
    duration = expire_seconds if expire_seconds > 0 else settings.token_expire_seconds
    issued_at = _timestamp(now)
    payload = {
        "id": user_id,
        "email": email,
        "iat": issued_at,
        "exp": issued_at + duration,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=_ALGORITHM)


def verify_token(token: str, now: datetime | None = None) -> TokenResult:
    """Check signature and expiry. Returns TokenOk or TokenError, never raises."""
    try:
        jwt.get_unverified_claims(token)
    except JWTError:
        return TokenError(MALFORMED)

    try:
        payload = jwt.decode(
            token,
            get_settings().secret_key,
            algorithms=[_ALGORITHM],
            options={"verify_exp": False},
        )
    except JWTError:
        return TokenError(BAD_SIGNATURE)

    user_id = payload.get("id")
    email = payload.get("email")
    expires_at = payload.get("exp")
    if not isinstance(user_id, int) or not isinstance(email, str) or not isinstance(expires_at, int):
        return TokenError(MISSING_CLAIMS)

    if _timestamp(now) >= expires_at:
        return TokenError(EXPIRED)

    return TokenOk(
        identity=Identity(id=user_id, email=email),
        issued_at=int(payload.get("iat", 0)),
        expires_at=expires_at,
    )
