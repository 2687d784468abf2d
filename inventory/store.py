"""
inventory/store.py -- SQLAlchemy-backed persistence layer for vehicles.

Uses SQLAlchemy Core (not ORM) so the dataclasses in inventory/models.py
remain the authoritative domain representation.

Pattern: Repository + Data Mapper. VehicleStore is the repository;
_row_to_vehicle is the mapper.

Ownership (IDOR guard): every method takes owner_id and puts it in the WHERE
clause next to the vehicle id. A row owned by someone else is simply not
matched, so get() returns None and update()/delete() return False -- exactly
what a non-existent id produces. There is no code path that reads a vehicle
without its owner filter.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = VehicleStore(database)
    vid = store.create(owner_id, fields)
    store.update(owner_id, vid, fields)
    count, total = store.margin_totals(owner_id)
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy import func, select

from db.engine import Database
from db.schema import vehicles as _vehicles
from inventory.models import ZERO, Vehicle, VehicleFields

_CENT = Decimal("0.01")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _money(value) -> Decimal:
    """Coerce a stored or aggregated amount to a 2-place Decimal."""
    if value is None:
        return ZERO
    return Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)


def _field_values(fields: VehicleFields) -> dict:
    return {
        "marca": fields.brand,
        "modelo": fields.model,
        "ano": fields.year or "",
        "fipe": fields.fipe_value if fields.fipe_value is not None else ZERO,
        "valor_compra": fields.purchase_value,
        "impostos": fields.taxes if fields.taxes is not None else ZERO,
        "valor_venda": fields.sale_value,
        "observacoes": fields.notes,
    }


class VehicleStore:
    """Owner-scoped repository for Vehicle entities."""

    def __init__(self, database: Database) -> None:
        self.engine = database.engine

    def list_for_owner(self, owner_id: int) -> list[Vehicle]:
        """Return the owner's vehicles, newest first (id breaks created_at ties)."""
        with self.engine.connect() as conn:
            rows = conn.execute(
                _vehicles.select()
                .where(_vehicles.c.user_id == owner_id)
                .order_by(_vehicles.c.created_at.desc(), _vehicles.c.id.desc())
            ).fetchall()
        return [_row_to_vehicle(r) for r in rows]

    def create(self, owner_id: int, fields: VehicleFields) -> int:
        """Insert a vehicle for owner_id and return its new ID. fields must be validated."""
        now = _now_iso()
        with self.engine.connect() as conn:
            result = conn.execute(
                _vehicles.insert().values(
                    user_id=owner_id,
                    created_at=now,
                    updated_at=now,
                    **_field_values(fields),
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def get(self, owner_id: int, vehicle_id: int) -> Vehicle | None:
        with self.engine.connect() as conn:
            row = conn.execute(
                _vehicles.select().where((_vehicles.c.id == vehicle_id) & (_vehicles.c.user_id == owner_id))
            ).fetchone()
        return _row_to_vehicle(row) if row is not None else None

    def update(self, owner_id: int, vehicle_id: int, fields: VehicleFields) -> bool:
        """Replace every mutable field. Returns False if no row matched id + owner."""
        with self.engine.connect() as conn:
            result = conn.execute(
                _vehicles.update()
                .where((_vehicles.c.id == vehicle_id) & (_vehicles.c.user_id == owner_id))
                .values(updated_at=_now_iso(), **_field_values(fields))
            )
            conn.commit()
        return result.rowcount > 0

    def delete(self, owner_id: int, vehicle_id: int) -> bool:
        """Delete a vehicle. Returns False if no row matched id + owner."""
        with self.engine.connect() as conn:
            result = conn.execute(
                _vehicles.delete().where((_vehicles.c.id == vehicle_id) & (_vehicles.c.user_id == owner_id))
            )
            conn.commit()
        return result.rowcount > 0

    def margin_totals(self, owner_id: int) -> tuple[int, Decimal]:
        """Return (vehicle count, summed margin) for the owner in one aggregate query.

        margin = valor_venda - valor_compra - impostos. SUM over zero rows is
        NULL, which _money() turns into 0.00.
        """
        margin = _vehicles.c.valor_venda - _vehicles.c.valor_compra - _vehicles.c.impostos
        with self.engine.connect() as conn:
            row = conn.execute(
                select(func.count(_vehicles.c.id), func.sum(margin)).where(_vehicles.c.user_id == owner_id)
            ).one()
        return int(row[0] or 0), _money(row[1])


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_vehicle(row) -> Vehicle:
    return Vehicle(
        id=row.id,
        owner_id=row.user_id,
        brand=row.marca,
        model=row.modelo,
        year=row.ano or "",
        fipe_value=_money(row.fipe),
        purchase_value=_money(row.valor_compra),
        taxes=_money(row.impostos),
        sale_value=_money(row.valor_venda),
        notes=row.observacoes,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
