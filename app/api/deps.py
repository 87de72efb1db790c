"""API dependency helpers and service providers."""

from app.services.factory import get_geocoding_service, get_school_service, get_zone_service
from app.services.interfaces import GeocodingService, SchoolService, ZoneService

__all__ = [
    "school_service",
    "zone_service",
    "geocoding_service",
]


# --- Service providers for DI ---
# Resolved through the memoized factory so tests can swap backends with
# ``service_factory.reset()`` or ``app.dependency_overrides``.


def school_service() -> SchoolService:
    return get_school_service()


def zone_service() -> ZoneService:
    return get_zone_service()


def geocoding_service() -> GeocodingService:
    return get_geocoding_service()
