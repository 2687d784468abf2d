"""
tests/conftest.py -- Shared test fixtures for the AUTOGIRO test suite.

This module provides:
  - make_database(): creates an isolated in-memory SQLite database with schema
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - database / user_store / vehicle_store: per-test stores for unit tests
  - api_client: module-scoped TestClient against isolated stores
  - register_user / auth_header: fixtures handing tests the API registration
    helper and the bearer header builder

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker thread.
The named URI format (file:name?mode=memory&cache=shared&uri=true) shares one
in-memory instance across all connections in the same process.

DEBUG and BCRYPT_ROUNDS must be set before any app module import so
get_settings() auto-generates SECRET_KEY (dev mode) and hashing stays fast.
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: Set these before any auth/core import so get_settings() picks them up.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.store import UserStore
from db.engine import Database
from inventory.store import VehicleStore

# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def make_database(prefix: str = "test") -> Database:
    """Create a fresh named shared-memory database with all tables.

    The uuid suffix keeps every call isolated, even within one test module.
    """
    url = f"sqlite:///file:{prefix}_{uuid.uuid4().hex}?mode=memory&cache=shared&uri=true"
    database = Database(url)
    database.create_all()
    return database


def _patch_lifespan(database: Database):
    """Return an async context manager that replaces the real lifespan.

    The real lifespan opens DATABASE_URL and seeds default accounts; tests
    get an empty isolated database instead.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.database = database
        app.state.user_store = UserStore(database)
        app.state.vehicle_store = VehicleStore(database)
        yield

    return test_lifespan


def _register_user(client: TestClient, name: str = "Test User", password: str = "secret123") -> tuple[str, dict]:
    """Register a uniquely-named account via POST /api/register. Returns (token, user)."""
    email = f"{uuid.uuid4().hex[:12]}@example.com"
    resp = client.post("/api/register", json={"name": name, "email": email, "password": password})
    assert resp.status_code == 201, f"Expected 201, got {resp.status_code}: {resp.text}"
    data = resp.json()
    return data["token"], data["user"]


def _auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Function-scoped fixtures -- fresh stores per unit test
# ---------------------------------------------------------------------------


@pytest.fixture
def database() -> Generator[Database, None, None]:
    db = make_database("unit")
    yield db
    db.close()


@pytest.fixture
def user_store(database: Database) -> UserStore:
    return UserStore(database)


@pytest.fixture
def vehicle_store(database: Database) -> VehicleStore:
    return VehicleStore(database)


# ---------------------------------------------------------------------------
# Module-scoped fixture -- one TestClient per test module for speed
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_client() -> Generator[TestClient, None, None]:
    """Yield a TestClient for the real app wired to an isolated database.

    Tests hit real route handlers, the real auth guard and real stores. Each
    test registers its own users (register_user) so tests in one module do
    not see each other's vehicles.
    """
    db = make_database("api")
    app.router.lifespan_context = _patch_lifespan(db)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client

    db.close()


@pytest.fixture
def register_user():
    return _register_user


@pytest.fixture
def auth_header():
    return _auth_header
