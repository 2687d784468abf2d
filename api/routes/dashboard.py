"""
api/routes/dashboard.py -- Profitability summary for the caller's vehicles.

Returns a single payload for the dashboard widgets:
  total_vehicles -- number of vehicles the caller owns
  avg_margin     -- mean of (valor_venda - valor_compra - impostos), 0.00 when empty
  total_margin   -- sum of the same margin

This is a read-only aggregate route -- no mutations here.
"""

from fastapi import APIRouter, Depends, Request

from api.models import DashboardResponse, DashboardStats, ErrorResponse
from auth.dependencies import get_current_identity
from auth.models import Identity
from inventory import service
from inventory.store import VehicleStore

router = APIRouter(
    dependencies=[Depends(get_current_identity)],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(request: Request, identity: Identity = Depends(get_current_identity)) -> DashboardResponse:
    store: VehicleStore = request.app.state.vehicle_store
    stats = service.dashboard(store, identity.id)
    return DashboardResponse(stats=DashboardStats.from_stats(stats))
