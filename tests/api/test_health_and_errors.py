"""Probes, request ids and error mapping."""

from __future__ import annotations

from app import db
from app.api.deps import school_service
from app.core.exceptions import InfrastructureError


def test_healthz(client) -> None:
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_readyz_in_mock_mode(client) -> None:
    assert client.get("/readyz").json() == {"ok": True}


class _UnreachableSession:
    async def __aenter__(self):
        raise OSError("connection refused")

    async def __aexit__(self, *exc) -> None:
        return None


def test_readyz_reports_unreachable_database(client, monkeypatch) -> None:
    monkeypatch.setenv("SCHOOL_SERVICE", "database")
    monkeypatch.setattr(db, "SessionLocal", _UnreachableSession)

    resp = client.get("/readyz")

    assert resp.status_code == 503
    assert resp.json() == {"detail": "Service Unavailable"}


def test_request_id_is_echoed_or_generated(client) -> None:
    resp = client.get("/healthz", headers={"X-Request-ID": "req-123"})
    assert resp.headers["X-Request-ID"] == "req-123"
    assert client.get("/healthz").headers["X-Request-ID"]


class _BrokenSchoolService:
    def __init__(self, error: Exception) -> None:
        self._error = error

    async def search(self, criteria):
        raise self._error

    async def find_nearby(self, **kwargs):
        raise self._error

    async def get_by_id(self, school_id):
        raise self._error


def test_backend_failure_is_service_unavailable(app, client) -> None:
    error = InfrastructureError("school search failed: password authentication failed")
    app.dependency_overrides[school_service] = lambda: _BrokenSchoolService(error)

    resp = client.get("/search")

    assert resp.status_code == 503
    assert resp.json() == {"detail": "Service Unavailable"}


def test_unexpected_failure_is_internal_error(app, client) -> None:
    app.dependency_overrides[school_service] = lambda: _BrokenSchoolService(RuntimeError("boom"))

    resp = client.get("/schools/1")

    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal Server Error"}
