"""
auth/store.py -- SQLAlchemy Core persistence layer for user accounts.

Pattern: Repository + Data Mapper (same as inventory/store.py).
UserStore is the repository; _row_to_user is the mapper. Service and route
code never touches SQL directly.

Security:
  All queries use bound parameters. No f-strings in SQL.
  Email uniqueness is enforced by a UNIQUE constraint. create_user() lets the
  IntegrityError propagate so the registration flow can report a conflict
  even when two requests race past the existence check.

Emails are compared exactly. Callers pass the normalized form
(auth.service.normalize_email), which is also the form that gets stored.

Layer rule: no imports from api/ or inventory/.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import func, select

from auth.models import User
from db.engine import Database
from db.schema import users as _users


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserStore:
    """Repository for User entities.

    Usage:
        store = UserStore(database)
        uid = store.create_user(User(name="Ana", email="ana@example.com", password_hash=hash_password("secret")))
        user = store.get_by_email("ana@example.com")
    """

    def __init__(self, database: Database) -> None:
        self.engine = database.engine

    def create_user(self, user: User) -> int:
        """Insert a new user and return its assigned database ID.

        Raises sqlalchemy.exc.IntegrityError if the email already exists.
        """
        now = _now_iso()
        with self.engine.connect() as conn:
            result = conn.execute(
                _users.insert().values(
                    name=user.name,
                    email=user.email,
                    password=user.password_hash,
                    role=user.role,
                    status=user.status,
                    created_at=now,
                    updated_at=now,
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by exact email. Returns None if not found."""
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.email == email)).fetchone()
        return _row_to_user(row) if row is not None else None

    def get_by_id(self, user_id: int) -> User | None:
        with self.engine.connect() as conn:
            row = conn.execute(_users.select().where(_users.c.id == user_id)).fetchone()
        return _row_to_user(row) if row is not None else None

    def email_exists(self, email: str) -> bool:
        with self.engine.connect() as conn:
            found = conn.execute(select(_users.c.id).where(_users.c.email == email)).first()
        return found is not None

    def count_users(self) -> int:
        with self.engine.connect() as conn:
            result = conn.execute(select(func.count()).select_from(_users)).scalar()
        return result or 0


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_user(row) -> User:
    return User(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password,
        role=row.role,
        status=row.status,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
