"""
API request and response models for the AUTOGIRO REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
inventory/models.py, which own the internal domain representation. Route
handlers map between the two.

Request models accept every field as optional: presence checks belong to the
services (auth/service.py, inventory/service.py), which raise ValidationError
with a specific message. Pydantic only rejects values of the wrong type.

Every response carries the uniform envelope: success plus either a payload
or a message.
"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from auth.models import UserSummary
from inventory.models import MarginStats, Vehicle, VehicleFields

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Request body for POST /api/login."""

    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=255)


class RegisterRequest(BaseModel):
    """Request body for POST /api/register. Role and status are not accepted."""

    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    password: Optional[str] = Field(default=None, max_length=255)


class VehicleRequest(BaseModel):
    """Request body for POST /api/vehicles and PUT /api/vehicles/{id}.

    Keys are the camelCase names the frontend sends. Money fields accept JSON
    numbers or numeric strings; an empty string counts as absent.
    """

    model_config = ConfigDict(populate_by_name=True)

    brand: Optional[str] = Field(default=None, alias="marca")
    model: Optional[str] = Field(default=None, alias="modelo")
    year: Optional[str] = Field(default=None, alias="ano")
    fipe_value: Optional[Decimal] = Field(default=None, alias="fipe")
    purchase_value: Optional[Decimal] = Field(default=None, alias="valorCompra")
    taxes: Optional[Decimal] = Field(default=None, alias="impostos")
    sale_value: Optional[Decimal] = Field(default=None, alias="valorVenda")
    notes: Optional[str] = Field(default=None, alias="observacoes", max_length=5000)

    @field_validator("year", mode="before")
    @classmethod
    def year_as_text(cls, value):
        """Accept a numeric year (2020) as well as a string ("2020/2021")."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("fipe_value", "purchase_value", "taxes", "sale_value", mode="before")
    @classmethod
    def blank_money_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_fields(self) -> VehicleFields:
        return VehicleFields(
            brand=self.brand,
            model=self.model,
            year=self.year,
            fipe_value=self.fipe_value,
            purchase_value=self.purchase_value,
            taxes=self.taxes,
            sale_value=self.sale_value,
            notes=self.notes,
        )


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Envelope returned on every 4xx/5xx response."""

    model_config = ConfigDict(frozen=True)

    success: bool = False
    message: str


class MessageResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str


class UserOut(BaseModel):
    """Client-facing user summary. Never includes the password hash."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    email: str

    @classmethod
    def from_summary(cls, summary: UserSummary) -> "UserOut":
        return cls(id=summary.id, name=summary.name, email=summary.email)


class AuthResponse(BaseModel):
    """Response for POST /api/login and POST /api/register."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    user: UserOut
    token: str


class VehicleOut(BaseModel):
    """A stored vehicle, keyed by its storage column names. Money serializes as "150.00"."""

    model_config = ConfigDict(frozen=True)

    id: int
    user_id: int
    marca: str
    modelo: str
    ano: str
    fipe: Decimal
    valor_compra: Decimal
    impostos: Decimal
    valor_venda: Decimal
    observacoes: Optional[str]
    created_at: str
    updated_at: str

    @classmethod
    def from_vehicle(cls, vehicle: Vehicle) -> "VehicleOut":
        """Factory Method -- the domain-to-wire mapping lives beside the wire model."""
        return cls(
            id=vehicle.id,
            user_id=vehicle.owner_id,
            marca=vehicle.brand,
            modelo=vehicle.model,
            ano=vehicle.year,
            fipe=vehicle.fipe_value,
            valor_compra=vehicle.purchase_value,
            impostos=vehicle.taxes,
            valor_venda=vehicle.sale_value,
            observacoes=vehicle.notes,
            created_at=vehicle.created_at,
            updated_at=vehicle.updated_at,
        )


class VehicleListResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool = True
    vehicles: list[VehicleOut] = Field(default_factory=list)


class VehicleResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool = True
    vehicle: VehicleOut


class DashboardStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_vehicles: int
    avg_margin: Decimal
    total_margin: Decimal

    @classmethod
    def from_stats(cls, stats: MarginStats) -> "DashboardStats":
        return cls(
            total_vehicles=stats.total_vehicles,
            avg_margin=stats.avg_margin,
            total_margin=stats.total_margin,
        )


class DashboardResponse(BaseModel):
    """Response for GET /api/dashboard."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    stats: DashboardStats


class ConnectionTestResponse(BaseModel):
    """Response for GET /api/test."""

    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str
    timestamp: str


class ServiceInfoResponse(BaseModel):
    """Response for GET /."""

    model_config = ConfigDict(frozen=True)

    message: str
    version: str
    database: str
    endpoints: dict[str, list[str]]
