"""Unit tests for inventory/store.py -- owner-scoped vehicle persistence.

Covers:
- Insert applies defaults and timestamps; money round-trips at 2 decimals
- Ownership filter on get / update / delete / list (IDOR guard)
- Newest-first ordering
- Full-replace update bumps updated_at
- margin_totals() over zero and several rows
- Deleting a user cascades to their vehicles
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import delete

from auth.models import User
from auth.store import UserStore
from db.engine import Database
from db.schema import users
from inventory.models import VehicleFields
from inventory.store import VehicleStore


def _fields(purchase: str = "100", taxes: str | None = "10", sale: str = "150", **overrides) -> VehicleFields:
    values = dict(
        brand="Fiat",
        model="Uno",
        year="2015",
        fipe_value=Decimal("120"),
        purchase_value=Decimal(purchase),
        taxes=Decimal(taxes) if taxes is not None else None,
        sale_value=Decimal(sale),
        notes=None,
    )
    values.update(overrides)
    return VehicleFields(**values)


@pytest.fixture
def owners(user_store: UserStore) -> tuple[int, int]:
    """Two users, A and B. Vehicles need a real owner row for the foreign key."""
    a = user_store.create_user(User(name="A", email="a@example.com", password_hash="x"))
    b = user_store.create_user(User(name="B", email="b@example.com", password_hash="x"))
    return a, b


def test_create_then_get(vehicle_store: VehicleStore, owners) -> None:
    a, _ = owners
    vid = vehicle_store.create(a, _fields(notes="one owner"))
    vehicle = vehicle_store.get(a, vid)
    assert vehicle.id == vid
    assert vehicle.owner_id == a
    assert vehicle.brand == "Fiat"
    assert vehicle.purchase_value == Decimal("100.00")
    assert vehicle.sale_value == Decimal("150.00")
    assert vehicle.notes == "one owner"
    assert vehicle.created_at
    assert vehicle.created_at == vehicle.updated_at


def test_create_applies_money_defaults(vehicle_store: VehicleStore, owners) -> None:
    a, _ = owners
    vid = vehicle_store.create(a, _fields(fipe_value=None, taxes=None, year=None))
    vehicle = vehicle_store.get(a, vid)
    assert vehicle.fipe_value == Decimal("0.00")
    assert vehicle.taxes == Decimal("0.00")
    assert vehicle.year == ""


def test_cents_survive_round_trip(vehicle_store: VehicleStore, owners) -> None:
    a, _ = owners
    vid = vehicle_store.create(a, _fields(purchase="45999.90", taxes="1234.56", sale="52000.05"))
    vehicle = vehicle_store.get(a, vid)
    assert str(vehicle.purchase_value) == "45999.90"
    assert str(vehicle.taxes) == "1234.56"
    assert str(vehicle.sale_value) == "52000.05"
    assert vehicle.margin == Decimal("4765.59")


def test_other_owner_cannot_get(vehicle_store: VehicleStore, owners) -> None:
    a, b = owners
    vid = vehicle_store.create(a, _fields())
    assert vehicle_store.get(b, vid) is None


def test_other_owner_cannot_update(vehicle_store: VehicleStore, owners) -> None:
    a, b = owners
    vid = vehicle_store.create(a, _fields())
    assert vehicle_store.update(b, vid, _fields(brand="Hijacked")) is False
    assert vehicle_store.get(a, vid).brand == "Fiat"


def test_other_owner_cannot_delete(vehicle_store: VehicleStore, owners) -> None:
    a, b = owners
    vid = vehicle_store.create(a, _fields())
    assert vehicle_store.delete(b, vid) is False
    assert vehicle_store.get(a, vid) is not None


def test_list_is_scoped_to_owner(vehicle_store: VehicleStore, owners) -> None:
    a, b = owners
    vehicle_store.create(a, _fields(brand="A-car"))
    vehicle_store.create(b, _fields(brand="B-car"))
    assert [v.brand for v in vehicle_store.list_for_owner(a)] == ["A-car"]
    assert [v.brand for v in vehicle_store.list_for_owner(b)] == ["B-car"]


def test_list_newest_first(vehicle_store: VehicleStore, owners) -> None:
    a, _ = owners
    first = vehicle_store.create(a, _fields(model="First"))
    second = vehicle_store.create(a, _fields(model="Second"))
    third = vehicle_store.create(a, _fields(model="Third"))
    assert [v.id for v in vehicle_store.list_for_owner(a)] == [third, second, first]


def test_update_replaces_all_mutable_fields(vehicle_store: VehicleStore, owners) -> None:
    a, _ = owners
    vid = vehicle_store.create(a, _fields(notes="before"))
    original = vehicle_store.get(a, vid)
    replacement = VehicleFields(
        brand="VW",
        model="Gol",
        year="",
        fipe_value=Decimal("0"),
        purchase_value=Decimal("200"),
        taxes=Decimal("0"),
        sale_value=Decimal("260"),
        notes=None,
    )
    assert vehicle_store.update(a, vid, replacement) is True
    updated = vehicle_store.get(a, vid)
    assert (updated.brand, updated.model, updated.year) == ("VW", "Gol", "")
    assert updated.purchase_value == Decimal("200.00")
    assert updated.notes is None
    assert updated.owner_id == a
    assert updated.created_at == original.created_at
    assert updated.updated_at >= original.updated_at


def test_update_unknown_id(vehicle_store: VehicleStore, owners) -> None:
    a, _ = owners
    assert vehicle_store.update(a, 999_999, _fields()) is False


def test_delete_removes_row(vehicle_store: VehicleStore, owners) -> None:
    a, _ = owners
    vid = vehicle_store.create(a, _fields())
    assert vehicle_store.delete(a, vid) is True
    assert vehicle_store.get(a, vid) is None
    assert vehicle_store.delete(a, vid) is False


def test_margin_totals_empty(vehicle_store: VehicleStore, owners) -> None:
    a, _ = owners
    assert vehicle_store.margin_totals(a) == (0, Decimal("0.00"))


def test_margin_totals_scoped_sum(vehicle_store: VehicleStore, owners) -> None:
    a, b = owners
    vehicle_store.create(a, _fields(purchase="100", taxes="10", sale="150"))
    vehicle_store.create(a, _fields(purchase="200", taxes="20", sale="300"))
    vehicle_store.create(b, _fields(purchase="1", taxes="0", sale="1000"))
    assert vehicle_store.margin_totals(a) == (2, Decimal("120.00"))


def test_deleting_user_cascades_to_vehicles(database: Database, vehicle_store: VehicleStore, owners) -> None:
    a, b = owners
    vehicle_store.create(a, _fields())
    vehicle_store.create(a, _fields())
    kept = vehicle_store.create(b, _fields())

    with database.engine.connect() as conn:
        conn.execute(delete(users).where(users.c.id == a))
        conn.commit()

    assert vehicle_store.list_for_owner(a) == []
    assert [v.id for v in vehicle_store.list_for_owner(b)] == [kept]
