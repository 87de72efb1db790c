"""Zone containment and lookup for both backends."""

from __future__ import annotations

from collections.abc import Callable

import structlog
from shapely.geometry import Point, box

from app.data.catalog import Catalog, load_catalog
from app.dto import LocationDTO, ZoneCheckDTO, ZoneDTO, ZoneMatchDTO
from app.dto.mappers import map_zone, map_zone_match, zone_date
from app.infra.unit_of_work import UnitOfWork
from app.services.db_errors import translate_db_errors
from app.utils.geo import BBox

logger = structlog.get_logger(__name__)

UnitOfWorkFactory = Callable[[], UnitOfWork]


class DatabaseZoneService:
    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def check_address_in_zones(self, *, lat: float, lng: float) -> ZoneCheckDTO:
        with translate_db_errors("zone containment"):
            async with self._uow_factory() as uow:
                rows = await uow.zones.containing_point(lat=lat, lng=lng)
        logger.info("zones_contains", backend="database", matches=len(rows))
        return ZoneCheckDTO(
            query_point=LocationDTO(lat=lat, lng=lng),
            matches=[map_zone_match(row) for row in rows],
        )

    async def get_zone_by_school_id(self, school_id: str) -> ZoneDTO | None:
        with translate_db_errors("zone lookup"):
            async with self._uow_factory() as uow:
                row = await uow.zones.get_by_school_id(school_id)
        return map_zone(row) if row is not None else None

    async def get_zone_by_id(self, zone_id: str) -> ZoneDTO | None:
        with translate_db_errors("zone lookup"):
            async with self._uow_factory() as uow:
                row = await uow.zones.get_by_id(zone_id)
        return map_zone(row) if row is not None else None

    async def get_zones_in_bounds(self, bbox: BBox) -> list[ZoneDTO]:
        with translate_db_errors("zones in bounds"):
            async with self._uow_factory() as uow:
                rows = await uow.zones.intersecting(bbox)
        return [map_zone(row) for row in rows]


class MockZoneService:
    """Shapely predicates over the fixed catalog zones.

    ``covers`` keeps boundary points inside, matching ST_Covers.
    """

    def __init__(self, catalog: Catalog | None = None) -> None:
        self._catalog = catalog or load_catalog()

    async def check_address_in_zones(self, *, lat: float, lng: float) -> ZoneCheckDTO:
        point = Point(lng, lat)
        matches = []
        for zone in self._catalog.zones:
            if not zone.shape.covers(point):
                continue
            school = self._catalog.school_by_id(zone.dto.school_id)
            if school is None:
                continue
            matches.append(
                ZoneMatchDTO(
                    school_id=school.id,
                    school_name=school.name,
                    zone_last_updated=zone_date(zone.dto.last_updated),
                )
            )
        matches.sort(key=lambda m: m.school_name.lower())
        logger.info("zones_contains", backend="mock", matches=len(matches))
        return ZoneCheckDTO(query_point=LocationDTO(lat=lat, lng=lng), matches=matches)

    async def get_zone_by_school_id(self, school_id: str) -> ZoneDTO | None:
        return next((z.dto for z in self._catalog.zones if z.dto.school_id == school_id), None)

    async def get_zone_by_id(self, zone_id: str) -> ZoneDTO | None:
        return next((z.dto for z in self._catalog.zones if z.dto.id == zone_id), None)

    async def get_zones_in_bounds(self, bbox: BBox) -> list[ZoneDTO]:
        envelope = box(bbox.min_lng, bbox.min_lat, bbox.max_lng, bbox.max_lat)
        return [z.dto for z in self._catalog.zones if z.shape.intersects(envelope)]
