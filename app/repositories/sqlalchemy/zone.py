"""SQLAlchemy implementation of the zone repository."""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from app.models import School, Zone
from app.repositories.interfaces import ZoneReadRepository
from app.repositories.sqlalchemy.spatial import make_envelope, make_point
from app.utils.geo import BBox
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession


def _zone_select() -> Select:
    return select(
        Zone.id,
        Zone.school_id,
        func.ST_AsGeoJSON(Zone.geometry).label("geojson"),
        Zone.last_updated,
        Zone.notes,
    )


def _valid_uuid(value: str) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


class SqlAlchemyZoneReadRepository(ZoneReadRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def containing_point(self, *, lat: float, lng: float) -> list[Mapping[str, Any]]:
        # ST_Covers: a point on the boundary is inside.
        stmt = (
            select(
                Zone.school_id,
                School.name.label("school_name"),
                Zone.last_updated,
            )
            .join(School, School.id == Zone.school_id)
            .where(func.ST_Covers(Zone.geometry, make_point(lat, lng)))
            .order_by(func.lower(School.name).asc(), Zone.id.asc())
        )
        rows = await self._session.execute(stmt)
        return [row._mapping for row in rows.all()]

    async def get_by_school_id(self, school_id: str) -> Mapping[str, Any] | None:
        if not _valid_uuid(school_id):
            return None
        stmt = _zone_select().where(Zone.school_id == str(school_id))
        row = (await self._session.execute(stmt)).first()
        return row._mapping if row is not None else None

    async def get_by_id(self, zone_id: str) -> Mapping[str, Any] | None:
        if not _valid_uuid(zone_id):
            return None
        stmt = _zone_select().where(Zone.id == str(zone_id))
        row = (await self._session.execute(stmt)).first()
        return row._mapping if row is not None else None

    async def intersecting(self, bbox: BBox) -> list[Mapping[str, Any]]:
        stmt = (
            _zone_select()
            .where(func.ST_Intersects(Zone.geometry, make_envelope(bbox)))
            .order_by(Zone.id.asc())
        )
        rows = await self._session.execute(stmt)
        return [row._mapping for row in rows.all()]
