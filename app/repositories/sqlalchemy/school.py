"""SQLAlchemy implementation of the school repository."""

from __future__ import annotations

import uuid

from app.dto import SearchCriteria
from app.models import School, Zone
from app.repositories.interfaces import SchoolReadRepository, SchoolRow
from app.repositories.sqlalchemy.spatial import (
    escape_like,
    make_envelope,
    point_distance_m,
    within_radius_prefilter,
)
from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement


def _zone_id_subquery():  # type: ignore[no-untyped-def]
    return (
        select(Zone.id)
        .where(Zone.school_id == School.id)
        .correlate(School)
        .limit(1)
        .scalar_subquery()
    )


def _school_select(distance: ColumnElement | None = None) -> Select:
    columns = [
        School,
        func.ST_Y(School.location).label("lat"),
        func.ST_X(School.location).label("lng"),
        _zone_id_subquery().label("zone_id"),
    ]
    if distance is not None:
        columns.append(distance.label("distance_m"))
    return select(*columns)


def _to_row(row) -> SchoolRow:  # type: ignore[no-untyped-def]
    mapping = row._mapping
    return SchoolRow(
        school=mapping[School],
        lat=mapping["lat"],
        lng=mapping["lng"],
        zone_id=mapping["zone_id"],
        distance_m=mapping.get("distance_m"),
    )


def build_search_conditions(criteria: SearchCriteria) -> list[ColumnElement]:
    """Translate criteria into WHERE clauses shared by the page and count queries."""

    conditions: list[ColumnElement] = []

    if criteria.q:
        pattern = f"%{escape_like(criteria.q)}%"
        conditions.append(
            or_(
                School.name.ilike(pattern, escape="\\"),
                School.address.ilike(pattern, escape="\\"),
                School.suburb.ilike(pattern, escape="\\"),
            )
        )
    if criteria.types:
        conditions.append(School.type.in_(criteria.types))
    if criteria.genders:
        conditions.append(School.gender.in_(criteria.genders))
    if criteria.proprietors:
        conditions.append(School.proprietor.in_(criteria.proprietors))
    if criteria.boarding is not None:
        conditions.append(School.boarding.is_(criteria.boarding))
    if criteria.has_zone is not None:
        zoned = select(Zone.id).where(Zone.school_id == School.id).exists()
        conditions.append(zoned if criteria.has_zone else ~zoned)
    if criteria.equity_index_bands:
        conditions.append(School.equity_index_band.in_(criteria.equity_index_bands))
    if criteria.deciles:
        conditions.append(School.decile.in_(criteria.deciles))
    if criteria.center is not None and criteria.radius_m is not None:
        lat, lng = criteria.center
        conditions.append(School.location.is_not(None))
        conditions.append(within_radius_prefilter(School.location, lat, lng, criteria.radius_m))
        conditions.append(point_distance_m(School.location, lat, lng) <= criteria.radius_m)
    if criteria.bbox is not None:
        conditions.append(School.location.is_not(None))
        conditions.append(func.ST_Covers(make_envelope(criteria.bbox), School.location))

    return conditions


def _order_by(sort: str, distance: ColumnElement | None) -> list[ColumnElement]:
    if sort == "distance" and distance is not None:
        return [distance.asc(), School.id.asc()]
    if sort == "type":
        # PostgreSQL orders enum values by declaration order.
        return [School.type.asc(), func.lower(School.name).asc(), School.id.asc()]
    return [func.lower(School.name).asc(), School.id.asc()]


def _is_uuid(value: str) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class SqlAlchemySchoolReadRepository(SchoolReadRepository):
    """PostGIS-backed school reads."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def search(self, criteria: SearchCriteria) -> tuple[list[SchoolRow], int]:
        conditions = build_search_conditions(criteria)

        count_stmt = select(func.count()).select_from(School).where(*conditions)
        total = int(await self._session.scalar(count_stmt) or 0)
        if total == 0 or criteria.offset >= total:
            return [], total

        distance = None
        if criteria.center is not None:
            lat, lng = criteria.center
            distance = point_distance_m(School.location, lat, lng)

        stmt = (
            _school_select(distance)
            .where(*conditions)
            .order_by(*_order_by(criteria.sort, distance))
            .offset(criteria.offset)
            .limit(criteria.page_size)
        )
        rows = await self._session.execute(stmt)
        return [_to_row(row) for row in rows.all()], total

    async def get_by_id(self, school_id: str) -> SchoolRow | None:
        if not _is_uuid(school_id):
            return None
        stmt = _school_select().where(School.id == str(school_id))
        row = (await self._session.execute(stmt)).first()
        return _to_row(row) if row is not None else None

    async def find_nearby(
        self, *, lat: float, lng: float, radius_m: float, limit: int
    ) -> list[SchoolRow]:
        if limit <= 0:
            return []
        distance = point_distance_m(School.location, lat, lng)
        stmt = (
            _school_select(distance)
            .where(
                School.location.is_not(None),
                within_radius_prefilter(School.location, lat, lng, radius_m),
                distance <= radius_m,
            )
            .order_by(distance.asc(), School.id.asc())
            .limit(limit)
        )
        rows = await self._session.execute(stmt)
        return [_to_row(row) for row in rows.all()]


__all__ = ["SqlAlchemySchoolReadRepository", "build_search_conditions"]
