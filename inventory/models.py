"""
inventory/models.py -- Domain dataclasses for vehicle resale records.

These are pure data containers with zero logic beyond the margin formula.
Validation and ownership scoping live in inventory/service.py and
inventory/store.py respectively.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

ZERO = Decimal("0.00")


@dataclass
class VehicleFields:
    """Caller-supplied mutable fields for create and full-replace update.

    Everything is Optional here because this is unvalidated input;
    inventory.service.validate_fields() returns a copy with defaults applied
    (year "", fipe_value and taxes 0.00) or raises ValidationError.
    """

    brand: Optional[str] = None
    model: Optional[str] = None
    year: Optional[str] = None
    fipe_value: Optional[Decimal] = None
    purchase_value: Optional[Decimal] = None
    taxes: Optional[Decimal] = None
    sale_value: Optional[Decimal] = None
    notes: Optional[str] = None


@dataclass
class Vehicle:
    """A stored vehicle. owner_id never changes after insert."""

    id: int
    owner_id: int
    brand: str
    model: str
    year: str
    fipe_value: Decimal
    purchase_value: Decimal
    taxes: Decimal
    sale_value: Decimal
    notes: Optional[str] = None
    created_at: str = ""
    updated_at: str = ""

    @property
    def margin(self) -> Decimal:
        return self.sale_value - self.purchase_value - self.taxes


@dataclass(frozen=True)
class MarginStats:
    """Dashboard aggregate over one owner's vehicles.

    avg_margin is 0.00 (not None) when total_vehicles is 0.
    """

    total_vehicles: int
    avg_margin: Decimal
    total_margin: Decimal
