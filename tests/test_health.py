"""
tests/test_health.py -- Integration tests for GET /, GET /api/test and the 500 envelope.

Covers:
  - Service info lists the endpoint groups without authentication
  - Connection test reports ok, and 500 when the database does not answer
  - Uncaught and persistence failures render InternalError in the envelope
"""

from __future__ import annotations

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from core.errors import InternalError


def test_service_info(api_client: TestClient) -> None:
    resp = api_client.get("/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["version"] == "1.0.0"
    assert data["database"] == "sqlite"
    assert data["endpoints"]["vehicles"] == ["/api/vehicles"]


def test_connection_ok(api_client: TestClient) -> None:
    resp = api_client.get("/api/test", headers={})
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["timestamp"]


def test_connection_failure_is_500(api_client: TestClient, monkeypatch) -> None:
    monkeypatch.setattr(api_client.app.state.database, "ping", lambda: False)
    resp = api_client.get("/api/test")
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": "database connection failed"}


def test_database_error_is_internal_error(api_client: TestClient, monkeypatch, register_user, auth_header) -> None:
    token, _ = register_user(api_client)

    def broken(owner_id):
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    monkeypatch.setattr(api_client.app.state.vehicle_store, "list_for_owner", broken)
    resp = api_client.get("/api/vehicles", headers=auth_header(token))
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": InternalError().message}
    assert "disk" not in resp.text


def test_unexpected_error_is_internal_error(api_client: TestClient, monkeypatch, register_user, auth_header) -> None:
    token, _ = register_user(api_client)

    def broken(owner_id):
        raise RuntimeError("boom")

    monkeypatch.setattr(api_client.app.state.vehicle_store, "margin_totals", broken)
    # Starlette re-raises after the catch-all handler responds; this client keeps the response instead.
    client = TestClient(api_client.app, raise_server_exceptions=False)
    resp = client.get("/api/dashboard", headers=auth_header(token))
    assert resp.status_code == 500
    assert resp.json() == {"success": False, "message": InternalError().message}


def test_server_errors_render_through_internal_error(
    api_client: TestClient, monkeypatch, register_user, auth_header
) -> None:
    token, _ = register_user(api_client)

    def broken(owner_id):
        raise OperationalError("SELECT 1", {}, Exception("locked"))

    monkeypatch.setattr(InternalError, "default_message", "server fault")
    monkeypatch.setattr(api_client.app.state.vehicle_store, "list_for_owner", broken)
    resp = api_client.get("/api/vehicles", headers=auth_header(token))
    assert resp.status_code == InternalError.status_code == 500
    assert resp.json() == {"success": False, "message": "server fault"}
