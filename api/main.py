"""
api/main.py -- FastAPI application entry point for the AUTOGIRO API.

Run with:  python main.py serve
           uvicorn api.main:app --reload

Middleware stack (outermost to innermost):
  1. CORSMiddleware   -- adds CORS headers for the configured origins
  2. log_requests     -- one log line per request with status and latency

Lifespan handles startup (open database, create tables, seed default
accounts) and shutdown (dispose the engine) symmetrically. Nothing is served
until the seeding step has finished.

Every error leaves through one of the exception handlers below, which all
render the same {"success": false, "message": ...} envelope.
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models import ConnectionTestResponse, ErrorResponse, ServiceInfoResponse
from api.routes.auth import router as auth_router
from api.routes.dashboard import router as dashboard_router
from api.routes.vehicles import router as vehicles_router
from auth.service import bootstrap_default_users
from auth.store import UserStore
from core.config import get_settings
from core.errors import AppError, InternalError
from db.engine import Database
from inventory.store import VehicleStore

API_VERSION = "1.0.0"

_settings = get_settings()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("autogiro.api")


# ---------------------------------------------------------------------------
# Lifespan -- modern startup / shutdown pattern (replaces @app.on_event)
# ---------------------------------------------------------------------------


def open_database(url: str, default_user_password: str) -> Database:
    """Open the database, create missing tables, and seed default accounts.

    Shared by the lifespan and the `main.py seed` command so both bootstrap
    the same way.
    """
    database = Database(url)
    database.create_all()
    created = bootstrap_default_users(UserStore(database), default_user_password)
    logger.info("Default accounts verified (%d created)", created)
    return database


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application-level resources across the full server lifetime.

    Everything before yield runs on startup; everything after yield runs on
    shutdown. The database handle is created here and injected into the
    stores -- no module holds a global connection.
    """
    # Startup
    logger.info("AUTOGIRO API starting up")
    database = open_database(_settings.database_url, _settings.default_user_password)
    app.state.database = database
    app.state.user_store = UserStore(database)
    app.state.vehicle_store = VehicleStore(database)
    logger.info("Stores initialized")

    yield

    # Shutdown
    database.close()
    logger.info("AUTOGIRO API shutdown complete")


# ---------------------------------------------------------------------------
# App instantiation
# ---------------------------------------------------------------------------

app = FastAPI(
    title="AUTOGIRO API",
    description="Vehicle resale tracking: accounts, owner-scoped vehicle records, and margin dashboard.",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)


# ---------------------------------------------------------------------------
# Request logging middleware
#
# Every request passes through this coroutine before reaching any route
# handler. Wall-clock time before and after call_next gives the latency.
# ---------------------------------------------------------------------------


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    ms = (time.perf_counter() - start) * 1000
    logger.info(
        "%s %s %d %.1fms %s",
        request.method,
        request.url.path,
        response.status_code,
        ms,
        request.client.host if request.client else "unknown",
    )
    return response


# ---------------------------------------------------------------------------
# Router registration
# ---------------------------------------------------------------------------

app.include_router(auth_router, prefix="/api", tags=["Auth"])
app.include_router(vehicles_router, prefix="/api", tags=["Vehicles"])
app.include_router(dashboard_router, prefix="/api", tags=["Dashboard"])


# ---------------------------------------------------------------------------
# Exception handlers
#
# All handlers return the same ErrorResponse envelope so API clients can parse
# errors uniformly without inspecting status codes to choose a schema.
# ---------------------------------------------------------------------------


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(message=message).model_dump())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render a domain error raised by a service or the auth guard."""
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return 400 when the body or a path parameter has the wrong type."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"invalid value for {location}" if location else "invalid request"
    return _error(400, message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Envelope for routing-level errors: unknown path (404), wrong method (405)."""
    if exc.status_code == 404:
        message = "not found"
    elif exc.status_code == 405:
        message = "method not allowed"
    else:
        message = str(exc.detail).lower()
    return _error(exc.status_code, message)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Persistence failures are logged in full and reported as a bare 500. No retry."""
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return await app_error_handler(request, InternalError())


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected server errors.

    The raw exception goes to the log only, never to the response body.
    """
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return await app_error_handler(request, InternalError())


# ---------------------------------------------------------------------------
# Service info and connection test
#
# Defined directly in main.py (not in a router) so they are always reachable
# regardless of router registration state. No authentication.
# ---------------------------------------------------------------------------


@app.get("/", response_model=ServiceInfoResponse, tags=["Health"])
def service_info(request: Request) -> ServiceInfoResponse:
    database: Database = request.app.state.database
    return ServiceInfoResponse(
        message="AUTOGIRO API is running",
        version=API_VERSION,
        database=database.engine.dialect.name,
        endpoints={
            "auth": ["/api/login", "/api/register"],
            "vehicles": ["/api/vehicles"],
            "dashboard": ["/api/dashboard"],
            "test": ["/api/test"],
        },
    )


@app.get(
    "/api/test",
    response_model=ConnectionTestResponse,
    responses={500: {"model": ErrorResponse}},
    tags=["Health"],
)
def connection_test(request: Request):
    """Report whether the database answers a trivial query."""
    database: Database = request.app.state.database
    if not database.ping():
        return _error(500, "database connection failed")
    return ConnectionTestResponse(
        message="database connection ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
