"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in inventory/models.py -- dataclasses own domain shape; stores and services
do the work.

Layer rule: no imports from api/, inventory/, or db/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered account.

    email is always stored in normalized form (stripped, lower-cased); see
    auth.service.normalize_email. password_hash is the bcrypt output and must
    never leave the server -- UserSummary is what clients see.

    id is None before the record is written to the database.
    """

    name: str
    email: str
    password_hash: str
    role: str = "standard"  # "admin" | "seller" | "standard"
    status: str = "active"  # "active" | "inactive"
    id: int | None = None
    created_at: str = ""  # ISO 8601, set by store on insert
    updated_at: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == "active"


@dataclass(frozen=True)
class UserSummary:
    """The client-safe projection of a User: no hash, no role, no status."""

    id: int
    name: str
    email: str


@dataclass(frozen=True)
class Identity:
    """The caller of a protected operation, as asserted by a verified token."""

    id: int
    email: str


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful login or registration."""

    user: UserSummary
    token: str


@dataclass(frozen=True)
class DefaultAccount:
    """An account seeded at startup when its email is not yet registered."""

    name: str
    email: str
    role: str
