"""School search, proximity and lookup for both backends."""

from __future__ import annotations

import math
from collections.abc import Callable

import structlog

from app.core.exceptions import ValidationError
from app.data.catalog import Catalog, load_catalog
from app.dto import SchoolDTO, SearchCriteria, SearchPageDTO
from app.dto.mappers import map_school
from app.infra.unit_of_work import UnitOfWork
from app.models.enums import SCHOOL_TYPE_ORDER
from app.repositories.interfaces import SchoolRow
from app.services.db_errors import translate_db_errors
from app.utils.geo import DEFAULT_RADIUS_M, haversine_distance_m
from app.utils.paging import clamp_nearby_limit

logger = structlog.get_logger(__name__)

UnitOfWorkFactory = Callable[[], UnitOfWork]


def normalize_nearby_args(radius_m: float | None, limit: int | None) -> tuple[float, int]:
    """Apply defaults (5000 m, 5 results) and the 20-result cap."""

    radius = DEFAULT_RADIUS_M if radius_m is None else float(radius_m)
    if not math.isfinite(radius) or radius < 0:
        raise ValidationError("radius must be a non-negative number of metres")
    if limit is not None and int(limit) < 0:
        raise ValidationError("limit must not be negative")
    return radius, clamp_nearby_limit(limit)


def _row_to_dto(row: SchoolRow) -> SchoolDTO:
    return map_school(
        row.school, lat=row.lat, lng=row.lng, zone_id=row.zone_id, distance_m=row.distance_m
    )


class DatabaseSchoolService:
    """PostGIS-backed implementation."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def search(self, criteria: SearchCriteria) -> SearchPageDTO:
        with translate_db_errors("school search"):
            async with self._uow_factory() as uow:
                rows, total = await uow.schools.search(criteria)
        logger.info(
            "schools_search",
            backend="database",
            total=total,
            page=criteria.page,
            page_size=criteria.page_size,
            sort=criteria.sort,
        )
        return SearchPageDTO(
            results=[_row_to_dto(row) for row in rows],
            total=total,
            page=criteria.page,
            page_size=criteria.page_size,
        )

    async def find_nearby(
        self, *, lat: float, lng: float, radius_m: float | None = None, limit: int | None = None
    ) -> list[SchoolDTO]:
        radius, capped = normalize_nearby_args(radius_m, limit)
        if radius == 0 or capped == 0:
            return []
        with translate_db_errors("nearby schools"):
            async with self._uow_factory() as uow:
                rows = await uow.schools.find_nearby(
                    lat=lat, lng=lng, radius_m=radius, limit=capped
                )
        logger.info("schools_nearby", backend="database", radius=radius, count=len(rows))
        return [_row_to_dto(row) for row in rows]

    async def get_by_id(self, school_id: str) -> SchoolDTO | None:
        with translate_db_errors("school lookup"):
            async with self._uow_factory() as uow:
                row = await uow.schools.get_by_id(school_id)
        return _row_to_dto(row) if row is not None else None


def _text_matches(school: SchoolDTO, needle: str) -> bool:
    haystacks = (school.name, school.address or "", school.suburb or "")
    return any(needle in value.lower() for value in haystacks)


def _distance_from(school: SchoolDTO, center: tuple[float, float]) -> float | None:
    if school.location is None:
        return None
    return haversine_distance_m(center, (school.location.lat, school.location.lng))


def _matches(school: SchoolDTO, criteria: SearchCriteria, distance: float | None) -> bool:
    if criteria.q and not _text_matches(school, criteria.q.lower()):
        return False
    if criteria.types and school.type not in criteria.types:
        return False
    if criteria.genders and school.gender not in criteria.genders:
        return False
    if criteria.proprietors and school.proprietor not in criteria.proprietors:
        return False
    if criteria.boarding is not None and school.boarding != criteria.boarding:
        return False
    if criteria.has_zone is not None and school.has_zone != criteria.has_zone:
        return False
    if criteria.equity_index_bands and school.equity_index_band not in criteria.equity_index_bands:
        return False
    if criteria.deciles and school.decile not in criteria.deciles:
        return False
    if criteria.center is not None and criteria.radius_m is not None:
        if distance is None or distance > criteria.radius_m:
            return False
    if criteria.bbox is not None:
        if school.location is None:
            return False
        if not criteria.bbox.contains(school.location.lat, school.location.lng):
            return False
    return True


class MockSchoolService:
    """In-memory implementation over the fixed Auckland catalog."""

    def __init__(self, catalog: Catalog | None = None) -> None:
        self._catalog = catalog or load_catalog()

    async def search(self, criteria: SearchCriteria) -> SearchPageDTO:
        matched: list[tuple[SchoolDTO, float | None]] = []
        for school in self._catalog.schools:
            distance = _distance_from(school, criteria.center) if criteria.center else None
            if _matches(school, criteria, distance):
                matched.append((school, distance))

        if criteria.sort == "distance":
            # Stable sort: equal distances keep dataset order.
            matched.sort(key=lambda item: math.inf if item[1] is None else item[1])
        elif criteria.sort == "type":
            matched.sort(
                key=lambda item: (
                    SCHOOL_TYPE_ORDER[item[0].type],
                    item[0].name.lower(),
                    item[0].id,
                )
            )
        else:
            matched.sort(key=lambda item: (item[0].name.lower(), item[0].id))

        page = matched[criteria.offset : criteria.offset + criteria.page_size]
        results = [
            school.model_copy(update={"distance_meters": distance})
            if distance is not None
            else school
            for school, distance in page
        ]
        logger.info(
            "schools_search",
            backend="mock",
            total=len(matched),
            page=criteria.page,
            page_size=criteria.page_size,
            sort=criteria.sort,
        )
        return SearchPageDTO(
            results=results,
            total=len(matched),
            page=criteria.page,
            page_size=criteria.page_size,
        )

    async def find_nearby(
        self, *, lat: float, lng: float, radius_m: float | None = None, limit: int | None = None
    ) -> list[SchoolDTO]:
        radius, capped = normalize_nearby_args(radius_m, limit)
        if radius == 0 or capped == 0:
            return []
        within: list[tuple[SchoolDTO, float]] = []
        for school in self._catalog.schools:
            distance = _distance_from(school, (lat, lng))
            if distance is not None and distance <= radius:
                within.append((school, distance))
        within.sort(key=lambda item: item[1])
        logger.info("schools_nearby", backend="mock", radius=radius, count=len(within[:capped]))
        return [
            school.model_copy(update={"distance_meters": distance})
            for school, distance in within[:capped]
        ]

    async def get_by_id(self, school_id: str) -> SchoolDTO | None:
        return self._catalog.school_by_id(school_id)
