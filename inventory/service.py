"""
inventory/service.py -- Owner-scoped vehicle operations and the margin dashboard.

Every function takes the owner id from the verified token (auth.models.Identity)
and passes it straight to VehicleStore, whose queries filter on it. A vehicle
belonging to another user therefore surfaces as NotFound, never as a
permission error, so callers cannot probe which ids exist.

Input validation runs here, before any store call: an invalid create or
update never touches the database.
"""

from __future__ import annotations

from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from core.errors import NotFound, ValidationError
from inventory.models import ZERO, MarginStats, Vehicle, VehicleFields
from inventory.store import VehicleStore

_CENT = Decimal("0.01")
# NUMERIC(15, 2) holds 13 integer digits.
_MONEY_LIMIT = Decimal("1e13")
_MAX_NAME_LENGTH = 100
_MAX_YEAR_LENGTH = 10
_REQUIRED_MESSAGE = "brand, model, purchase value and sale value are required"
_NOT_FOUND_MESSAGE = "vehicle not found"


def _clean_text(value: str | None) -> str:
    return (value or "").strip()


def _clean_money(value: Decimal | None, label: str) -> Decimal | None:
    if value is None:
        return None
    if not value.is_finite():
        raise ValidationError(f"{label} must be a number")
    if value < 0:
        raise ValidationError(f"{label} must not be negative")
    try:
        amount = value.quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        # More digits than the decimal context can hold.
        raise ValidationError(f"{label} is too large") from exc
    if amount >= _MONEY_LIMIT:
        raise ValidationError(f"{label} is too large")
    return amount


def validate_fields(fields: VehicleFields) -> VehicleFields:
    """Return a cleaned copy of fields with defaults applied, or raise ValidationError.

    brand, model, purchase_value and sale_value are mandatory. year defaults
    to "", fipe_value and taxes to 0.00, and blank notes become None.
    """
    brand = _clean_text(fields.brand)
    model = _clean_text(fields.model)
    if not brand or not model or fields.purchase_value is None or fields.sale_value is None:
        raise ValidationError(_REQUIRED_MESSAGE)
    if len(brand) > _MAX_NAME_LENGTH or len(model) > _MAX_NAME_LENGTH:
        raise ValidationError(f"brand and model must be at most {_MAX_NAME_LENGTH} characters")
    year = _clean_text(fields.year)
    if len(year) > _MAX_YEAR_LENGTH:
        raise ValidationError(f"year must be at most {_MAX_YEAR_LENGTH} characters")

    fipe_value = _clean_money(fields.fipe_value, "fipe value")
    taxes = _clean_money(fields.taxes, "taxes")
    return replace(
        fields,
        brand=brand,
        model=model,
        year=year,
        fipe_value=fipe_value if fipe_value is not None else ZERO,
        purchase_value=_clean_money(fields.purchase_value, "purchase value"),
        taxes=taxes if taxes is not None else ZERO,
        sale_value=_clean_money(fields.sale_value, "sale value"),
        notes=fields.notes if fields.notes and fields.notes.strip() else None,
    )


def list_vehicles(store: VehicleStore, owner_id: int) -> list[Vehicle]:
    return store.list_for_owner(owner_id)


def create_vehicle(store: VehicleStore, owner_id: int, fields: VehicleFields) -> Vehicle:
    """Validate, insert, and return the stored row (server-side defaults and timestamps included)."""
    cleaned = validate_fields(fields)
    vehicle_id = store.create(owner_id, cleaned)
    created = store.get(owner_id, vehicle_id)
    if created is None:
        # The row vanished between insert and read-back (e.g. owner deleted).
        raise NotFound(_NOT_FOUND_MESSAGE)
    return created


def get_vehicle(store: VehicleStore, owner_id: int, vehicle_id: int) -> Vehicle:
    vehicle = store.get(owner_id, vehicle_id)
    if vehicle is None:
        raise NotFound(_NOT_FOUND_MESSAGE)
    return vehicle


def update_vehicle(store: VehicleStore, owner_id: int, vehicle_id: int, fields: VehicleFields) -> None:
    """Full replace of the mutable fields. Zero rows matched is NotFound."""
    cleaned = validate_fields(fields)
    if not store.update(owner_id, vehicle_id, cleaned):
        raise NotFound(_NOT_FOUND_MESSAGE)


def delete_vehicle(store: VehicleStore, owner_id: int, vehicle_id: int) -> None:
    if not store.delete(owner_id, vehicle_id):
        raise NotFound(_NOT_FOUND_MESSAGE)


def dashboard(store: VehicleStore, owner_id: int) -> MarginStats:
    """Count, average margin and total margin across the owner's vehicles.

    With no vehicles the average is 0.00 rather than undefined. Halves round
    away from zero (0.125 -> 0.13).
    """
    count, total = store.margin_totals(owner_id)
    average = (total / count).quantize(_CENT, rounding=ROUND_HALF_UP) if count else ZERO
    return MarginStats(total_vehicles=count, avg_margin=average, total_margin=total)
