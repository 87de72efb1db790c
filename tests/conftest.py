"""Shared fixtures: the app runs against the in-memory backend unless a test says otherwise."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Boot the app in mock mode before it is imported.
os.environ["APP_ENV"] = "mock"
os.environ.setdefault("TESTING", "1")
os.environ["SENTRY_DSN"] = ""
for _key in ("SCHOOL_SERVICE", "ZONE_SERVICE", "GEOCODING_SERVICE"):
    os.environ.pop(_key, None)

from app.main import create_app  # noqa: E402 (import after env tweaks)
from app.services.factory import service_factory  # noqa: E402

_BACKEND_ENV = ("SCHOOL_SERVICE", "ZONE_SERVICE", "GEOCODING_SERVICE")


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests without external services")
    config.addinivalue_line("markers", "integration: needs a PostGIS database (TEST_DATABASE_URL)")


@pytest.fixture(autouse=True)
def _mock_backends(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Every test starts from APP_ENV=mock and an empty service memo."""
    monkeypatch.setenv("APP_ENV", "mock")
    for key in _BACKEND_ENV:
        monkeypatch.delenv(key, raising=False)
    service_factory.reset()
    yield
    service_factory.reset()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return create_app()


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
