"""Capability interfaces implemented by the database and in-memory backends."""

from __future__ import annotations

from typing import Protocol

from app.dto import (
    GeocodeResultDTO,
    SchoolDTO,
    SearchCriteria,
    SearchPageDTO,
    ZoneCheckDTO,
    ZoneDTO,
)
from app.utils.geo import BBox


class SchoolService(Protocol):
    async def search(self, criteria: SearchCriteria) -> SearchPageDTO: ...

    async def find_nearby(
        self, *, lat: float, lng: float, radius_m: float | None = None, limit: int | None = None
    ) -> list[SchoolDTO]: ...

    async def get_by_id(self, school_id: str) -> SchoolDTO | None: ...


class ZoneService(Protocol):
    async def check_address_in_zones(self, *, lat: float, lng: float) -> ZoneCheckDTO: ...

    async def get_zone_by_school_id(self, school_id: str) -> ZoneDTO | None: ...

    async def get_zone_by_id(self, zone_id: str) -> ZoneDTO | None: ...

    async def get_zones_in_bounds(self, bbox: BBox) -> list[ZoneDTO]: ...


class GeocodingService(Protocol):
    async def geocode_address(self, query: str) -> list[GeocodeResultDTO]: ...

    async def reverse_geocode(self, *, lat: float, lng: float) -> str | None: ...
