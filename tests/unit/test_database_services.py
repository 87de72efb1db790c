"""Database-backed services against fake repositories."""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import InfrastructureError
from app.dto import SearchCriteria
from app.models import School
from app.models.enums import Gender, Proprietor, SchoolType
from app.repositories.interfaces import SchoolRow
from app.services.schools import DatabaseSchoolService
from app.services.zones import DatabaseZoneService
from app.utils.geo import BBox

pytestmark = pytest.mark.unit

SCHOOL_ID = "0b6f1d1e-4a55-4a0e-9a4e-3f1f1a0d2c11"
ZONE_ID = "5a0c4b3e-7a44-4d8f-8d59-2b1d4e7c9f20"


def _school() -> School:
    return School(
        id=SCHOOL_ID,
        name="Auckland Grammar School",
        aka_names=["AGS"],
        type=SchoolType.secondary,
        year_levels="Y9-13",
        min_year=9,
        max_year=13,
        gender=Gender.boys,
        proprietor=Proprietor.state,
        boarding=False,
        address="87 Mountain Road",
        suburb="Epsom",
        source_provider="builtin",
        source_file_id="auckland-sample",
    )


class _FakeSchoolRepository:
    def __init__(self, rows: list[SchoolRow], total: int | None = None, error=None) -> None:
        self._rows = rows
        self._total = len(rows) if total is None else total
        self._error = error
        self.calls: list[tuple[str, object]] = []

    async def search(self, criteria):
        self.calls.append(("search", criteria))
        if self._error:
            raise self._error
        return list(self._rows), self._total

    async def find_nearby(self, *, lat, lng, radius_m, limit):
        self.calls.append(("find_nearby", (lat, lng, radius_m, limit)))
        if self._error:
            raise self._error
        return list(self._rows)

    async def get_by_id(self, school_id):
        self.calls.append(("get_by_id", school_id))
        return self._rows[0] if self._rows else None


class _FakeZoneRepository:
    def __init__(self, rows: list[dict]) -> None:
        self._rows = rows

    async def containing_point(self, *, lat, lng):
        return [
            {"school_id": r["school_id"], "school_name": "Auckland Grammar School", "last_updated": r["last_updated"]}
            for r in self._rows
        ]

    async def get_by_school_id(self, school_id):
        return next((r for r in self._rows if r["school_id"] == school_id), None)

    async def get_by_id(self, zone_id):
        return next((r for r in self._rows if r["id"] == zone_id), None)

    async def intersecting(self, bbox):
        return list(self._rows)


class _FakeUnitOfWork:
    def __init__(self, schools=None, zones=None) -> None:
        self.schools = schools
        self.zones = zones
        self.entered = 0

    async def __aenter__(self):
        self.entered += 1
        return self

    async def __aexit__(self, *exc) -> None:
        return None


@pytest.mark.asyncio
async def test_search_maps_rows_to_dtos() -> None:
    row = SchoolRow(school=_school(), lat=-36.8717, lng=174.7708, zone_id=ZONE_ID, distance_m=12.5)
    repo = _FakeSchoolRepository([row], total=9)
    uow = _FakeUnitOfWork(schools=repo)
    svc = DatabaseSchoolService(lambda: uow)

    criteria = SearchCriteria(q="grammar", page=2, page_size=1)
    page = await svc.search(criteria)

    assert repo.calls == [("search", criteria)]
    assert page.total == 9
    assert page.page == 2 and page.page_size == 1
    school = page.results[0]
    assert school.id == SCHOOL_ID
    assert school.location is not None
    assert (school.location.lat, school.location.lng) == (-36.8717, 174.7708)
    assert school.has_zone is True and school.zone_id == ZONE_ID
    assert school.distance_meters == 12.5
    assert school.aka_names == ["AGS"]


@pytest.mark.asyncio
async def test_school_without_zone_or_location() -> None:
    row = SchoolRow(school=_school(), lat=None, lng=None, zone_id=None)
    svc = DatabaseSchoolService(lambda: _FakeUnitOfWork(schools=_FakeSchoolRepository([row])))
    school = await svc.get_by_id(SCHOOL_ID)
    assert school is not None
    assert school.location is None
    assert school.has_zone is False


@pytest.mark.asyncio
async def test_database_errors_become_infrastructure_errors() -> None:
    error = OperationalError("SELECT 1", {}, Exception("connection refused"))
    svc = DatabaseSchoolService(
        lambda: _FakeUnitOfWork(schools=_FakeSchoolRepository([], error=error))
    )
    with pytest.raises(InfrastructureError) as excinfo:
        await svc.search(SearchCriteria())
    assert "connection refused" not in str(excinfo.value)


@pytest.mark.asyncio
async def test_find_nearby_clamps_and_short_circuits() -> None:
    repo = _FakeSchoolRepository([])
    uow = _FakeUnitOfWork(schools=repo)
    svc = DatabaseSchoolService(lambda: uow)

    assert await svc.find_nearby(lat=-36.8, lng=174.7, radius_m=0) == []
    assert await svc.find_nearby(lat=-36.8, lng=174.7, limit=0) == []
    assert uow.entered == 0

    await svc.find_nearby(lat=-36.8, lng=174.7, limit=99)
    assert repo.calls == [("find_nearby", (-36.8, 174.7, 5000.0, 20))]


@pytest.mark.asyncio
async def test_zone_service_maps_geojson_and_dates() -> None:
    row = {
        "id": ZONE_ID,
        "school_id": SCHOOL_ID,
        "geojson": '{"type":"MultiPolygon","coordinates":[[[[174.0,-36.0],[174.1,-36.0],[174.1,-35.9],[174.0,-36.0]]]]}',
        "last_updated": datetime(2024, 1, 15, 9, 30),
        "notes": None,
    }
    svc = DatabaseZoneService(lambda: _FakeUnitOfWork(zones=_FakeZoneRepository([row])))

    check = await svc.check_address_in_zones(lat=-36.0, lng=174.05)
    assert check.query_point.lat == -36.0
    assert [(m.school_id, m.zone_last_updated) for m in check.matches] == [
        (SCHOOL_ID, "2024-01-15")
    ]

    zone = await svc.get_zone_by_school_id(SCHOOL_ID)
    assert zone is not None
    assert zone.geometry["type"] == "MultiPolygon"
    assert zone.geometry["coordinates"][0][0][0] == [174.0, -36.0]
    assert await svc.get_zone_by_id("nope") is None
    assert [z.id for z in await svc.get_zones_in_bounds(BBox(173, -37, 175, -35))] == [ZONE_ID]
