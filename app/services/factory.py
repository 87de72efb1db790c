"""Backend selection for the three service capabilities.

Each capability is resolved from configuration on first access and memoized.
``reset()`` drops the memo so the next access re-reads the environment.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import structlog

from app.core.config import Settings, get_settings
from app.infra.unit_of_work import SqlAlchemyUnitOfWork
from app.services.geocode import CachedGeocodingService, MockGeocodingService, NominatimGeocoder
from app.services.interfaces import GeocodingService, SchoolService, ZoneService
from app.services.schools import DatabaseSchoolService, MockSchoolService
from app.services.zones import DatabaseZoneService, MockZoneService

logger = structlog.get_logger(__name__)

SCHOOL_BACKENDS = frozenset({"database", "mock"})
ZONE_BACKENDS = frozenset({"database", "mock"})
GEOCODING_BACKENDS = frozenset({"nominatim", "mock"})


def database_uow_factory() -> SqlAlchemyUnitOfWork:
    # Looked up per call so a reconfigured engine is picked up.
    from app import db

    return SqlAlchemyUnitOfWork(db.SessionLocal)


class ServiceFactory:
    def __init__(self, settings_provider=get_settings, uow_factory=database_uow_factory) -> None:
        self._settings_provider = settings_provider
        self._uow_factory = uow_factory
        self._instances: dict[str, Any] = {}

    def _select(self, capability: str, known: frozenset[str]) -> tuple[str, Settings]:
        settings = self._settings_provider()
        backend = settings.backend_for(capability)
        if backend not in known:
            logger.warning(
                "unknown_service_backend",
                capability=capability,
                backend=backend,
                fallback="mock",
            )
            backend = "mock"
        return backend, settings

    def school_service(self) -> SchoolService:
        if "school" not in self._instances:
            backend, _ = self._select("school", SCHOOL_BACKENDS)
            if backend == "database":
                service: SchoolService = DatabaseSchoolService(self._uow_factory)
            else:
                service = MockSchoolService()
            logger.info("service_selected", capability="school", backend=backend)
            self._instances["school"] = service
        return self._instances["school"]

    def zone_service(self) -> ZoneService:
        if "zones" not in self._instances:
            backend, _ = self._select("zones", ZONE_BACKENDS)
            if backend == "database":
                service: ZoneService = DatabaseZoneService(self._uow_factory)
            else:
                service = MockZoneService()
            logger.info("service_selected", capability="zones", backend=backend)
            self._instances["zones"] = service
        return self._instances["zones"]

    def geocoding_service(self) -> GeocodingService:
        if "geocoding" not in self._instances:
            backend, settings = self._select("geocoding", GEOCODING_BACKENDS)
            if backend == "nominatim":
                geocoder = NominatimGeocoder(
                    base_url=settings.geocoder_url,
                    user_agent=settings.geocoder_user_agent,
                    timeout=settings.geocoder_timeout_seconds,
                )
                service: GeocodingService = CachedGeocodingService(
                    self._uow_factory,
                    geocoder,
                    ttl=timedelta(days=settings.geocode_cache_ttl_days),
                )
            else:
                service = MockGeocodingService()
            logger.info("service_selected", capability="geocoding", backend=backend)
            self._instances["geocoding"] = service
        return self._instances["geocoding"]

    def reset(self) -> None:
        self._instances.clear()


service_factory = ServiceFactory()


def get_school_service() -> SchoolService:
    return service_factory.school_service()


def get_zone_service() -> ZoneService:
    return service_factory.zone_service()


def get_geocoding_service() -> GeocodingService:
    return service_factory.geocoding_service()
