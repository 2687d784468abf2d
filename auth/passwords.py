"""
auth/passwords.py -- Password hashing (bcrypt, used directly, no passlib wrapper).

bcrypt embeds the salt and cost factor in its output, so verify_password()
needs nothing but the stored string. Every hash_password() call draws a fresh
salt: hashing the same password twice yields two different stored values.

bcrypt only looks at the first 72 bytes of input, and bcrypt>=5 raises on
longer input instead of truncating. Registration rejects such passwords up
front (auth.service.MAX_PASSWORD_BYTES); verify_password() treats them as a
mismatch.
"""

from __future__ import annotations

import bcrypt

from core.config import get_settings


def hash_password(plain: str, rounds: int | None = None) -> str:
    """Return a bcrypt hash of the plaintext password.

    rounds defaults to Settings.bcrypt_rounds (BCRYPT_ROUNDS, default 10).
    """
    cost = rounds if rounds is not None else get_settings().bcrypt_rounds
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=cost)).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext matches the hash.

    Never raises: a malformed or empty hash is simply a failed verification.
    """
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


# Timing equalization dummy hash. Computed once at module load so the first
# login attempt is not measurably slower than subsequent ones. Login always
# runs one bcrypt check, even for an unknown email, so response time does not
# reveal whether an account exists.
_DUMMY_HASH: str = hash_password("autogiro_timing_dummy")


def burn_verification(plain: str) -> None:
    """Spend one bcrypt verification's worth of time and discard the result."""
    verify_password(plain, _DUMMY_HASH)
