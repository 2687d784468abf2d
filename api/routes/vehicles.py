"""
api/routes/vehicles.py -- Owner-scoped vehicle CRUD.

Routes:
  GET    /api/vehicles        -- caller's vehicles, newest first
  POST   /api/vehicles        -- create; returns the stored row
  GET    /api/vehicles/{id}   -- one vehicle, 404 if absent or not the caller's
  PUT    /api/vehicles/{id}   -- full replace of mutable fields
  DELETE /api/vehicles/{id}   -- delete

Every handler passes identity.id as the owner to inventory.service; the store
filters on it. Another user's vehicle id yields the same 404 as a
non-existent one.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from api.models import (
    ErrorResponse,
    MessageResponse,
    VehicleListResponse,
    VehicleOut,
    VehicleRequest,
    VehicleResponse,
)
from auth.dependencies import get_current_identity
from auth.models import Identity
from inventory import service
from inventory.store import VehicleStore

# Router-level dependency applies to every route registered on this router,
# so no handler can be added without the bearer-token check.
router = APIRouter(
    dependencies=[Depends(get_current_identity)],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)


def _store(request: Request) -> VehicleStore:
    return request.app.state.vehicle_store


@router.get("/vehicles", response_model=VehicleListResponse)
def list_vehicles(request: Request, identity: Identity = Depends(get_current_identity)) -> VehicleListResponse:
    vehicles = service.list_vehicles(_store(request), identity.id)
    return VehicleListResponse(vehicles=[VehicleOut.from_vehicle(v) for v in vehicles])


@router.post(
    "/vehicles",
    response_model=VehicleResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
def create_vehicle(
    request: Request,
    body: VehicleRequest,
    identity: Identity = Depends(get_current_identity),
) -> VehicleResponse:
    """Create a vehicle owned by the caller.

    The response is the row read back from the store, so server-side
    defaults (fipe/impostos 0.00, timestamps, id) are visible to the client.
    """
    vehicle = service.create_vehicle(_store(request), identity.id, body.to_fields())
    return VehicleResponse(vehicle=VehicleOut.from_vehicle(vehicle))


@router.get("/vehicles/{vehicle_id}", response_model=VehicleResponse, responses={404: {"model": ErrorResponse}})
def get_vehicle(
    request: Request,
    vehicle_id: int,
    identity: Identity = Depends(get_current_identity),
) -> VehicleResponse:
    vehicle = service.get_vehicle(_store(request), identity.id, vehicle_id)
    return VehicleResponse(vehicle=VehicleOut.from_vehicle(vehicle))


@router.put(
    "/vehicles/{vehicle_id}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def update_vehicle(
    request: Request,
    vehicle_id: int,
    body: VehicleRequest,
    identity: Identity = Depends(get_current_identity),
) -> MessageResponse:
    """Replace every mutable field. Omitted optional fields reset to their defaults."""
    service.update_vehicle(_store(request), identity.id, vehicle_id, body.to_fields())
    return MessageResponse(message="vehicle updated")


@router.delete("/vehicles/{vehicle_id}", response_model=MessageResponse, responses={404: {"model": ErrorResponse}})
def delete_vehicle(
    request: Request,
    vehicle_id: int,
    identity: Identity = Depends(get_current_identity),
) -> MessageResponse:
    service.delete_vehicle(_store(request), identity.id, vehicle_id)
    return MessageResponse(message="vehicle deleted")
