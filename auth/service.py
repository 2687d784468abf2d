"""
auth/service.py -- Login, registration, and default-account bootstrap.

These functions are the Authentication Flow. They talk to the password
hasher, the token issuer, and UserStore directly; the Authorization Guard is
not involved (login and register are public).

Enumeration resistance:
  login() raises one AuthError for an unknown email, a wrong password, and an
  inactive account. It also runs a bcrypt check in every case (against a dummy
  hash when the email is unknown) so timing does not tell them apart either.

Layer rule: no imports from api/ or inventory/.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError

from auth.models import AuthResult, DefaultAccount, User, UserSummary
from auth.passwords import burn_verification, hash_password, verify_password
from auth.store import UserStore
from auth.tokens import issue_token
from core.errors import AuthError, ConflictError, ValidationError

logger = logging.getLogger("autogiro.auth")

MIN_PASSWORD_LENGTH = 6
MAX_PASSWORD_BYTES = 72  # bcrypt input limit

DEFAULT_ACCOUNTS: tuple[DefaultAccount, ...] = (
    DefaultAccount(name="Administrador", email="admin@autogiro.com", role="admin"),
    DefaultAccount(name="Vendedor Principal", email="vendedor@autogiro.com", role="seller"),
)


def normalize_email(email: str) -> str:
    """Return the canonical storage/lookup form of an email address."""
    return email.strip().lower()


def _summary(user_id: int, name: str, email: str) -> UserSummary:
    return UserSummary(id=user_id, name=name, email=email)


def login(store: UserStore, email: str | None, password: str | None) -> AuthResult:
    """Verify credentials and issue a token.

    Raises:
        ValidationError: email or password missing.
        AuthError: unknown email, wrong password, or inactive account.
    """
    if not email or not password:
        raise ValidationError("email and password are required")

    normalized = normalize_email(email)
    user = store.get_by_email(normalized)
    if user is None:
        burn_verification(password)
        logger.info("Login rejected: unknown email")
        raise AuthError()
    if not verify_password(password, user.password_hash):
        logger.info("Login rejected: bad password for user_id=%s", user.id)
        raise AuthError()
    if not user.is_active:
        logger.info("Login rejected: inactive user_id=%s", user.id)
        raise AuthError()

    token = issue_token(user.id, user.email)
    logger.info("Login succeeded for user_id=%s", user.id)
    return AuthResult(user=_summary(user.id, user.name, user.email), token=token)


def register(store: UserStore, name: str | None, email: str | None, password: str | None) -> AuthResult:
    """Create a standard, active account and issue a token for it.

    Raises:
        ValidationError: a field is missing or the password is too short/long.
        ConflictError: the email is already registered.
    """
    name = (name or "").strip()
    if not name or not email or not password:
        raise ValidationError("name, email and password are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")

    normalized = normalize_email(email)
    if not normalized:
        raise ValidationError("name, email and password are required")
    if store.email_exists(normalized):
        raise ConflictError()

    new_user = User(name=name, email=normalized, password_hash=hash_password(password))
    try:
        user_id = store.create_user(new_user)
    except IntegrityError as exc:
        # A concurrent registration won the race between the check and the insert.
        raise ConflictError() from exc

    token = issue_token(user_id, normalized)
    logger.info("Registered user_id=%s", user_id)
    return AuthResult(user=_summary(user_id, name, normalized), token=token)


def bootstrap_default_users(
    store: UserStore,
    password: str,
    accounts: Iterable[DefaultAccount] = DEFAULT_ACCOUNTS,
) -> int:
    """Seed each account whose email is not registered yet. Returns how many were created.

    Idempotent: existing accounts (matched by email) are never modified, so
    running this on every startup is safe. An empty password skips seeding.
    """
    if not password:
        logger.warning("DEFAULT_USER_PASSWORD not set -- skipping default account seeding")
        return 0

    created = 0
    for account in accounts:
        email = normalize_email(account.email)
        if store.email_exists(email):
            continue
        try:
            store.create_user(
                User(
                    name=account.name,
                    email=email,
                    password_hash=hash_password(password),
                    role=account.role,
                )
            )
        except IntegrityError:
            # Another process seeded it between our check and insert.
            continue
        created += 1
        logger.info("Default account created: %s (%s)", email, account.role)
    return created
