from __future__ import annotations

import pytest

from app.services.zones import MockZoneService
from app.utils.geo import BBox

pytestmark = pytest.mark.unit


@pytest.fixture
def svc() -> MockZoneService:
    return MockZoneService()


@pytest.mark.asyncio
async def test_point_inside_one_zone(svc) -> None:
    result = await svc.check_address_in_zones(lat=-36.8717, lng=174.7708)
    assert result.query_point.lat == -36.8717
    assert result.query_point.lng == 174.7708
    assert [(m.school_id, m.school_name) for m in result.matches] == [
        ("1", "Auckland Grammar School")
    ]
    assert result.matches[0].zone_last_updated == "2024-01-15"


@pytest.mark.asyncio
async def test_mid_ocean_point_matches_nothing(svc) -> None:
    result = await svc.check_address_in_zones(lat=-40.0, lng=170.0)
    assert result.matches == []


@pytest.mark.asyncio
async def test_boundary_point_counts_as_inside(svc) -> None:
    zone = await svc.get_zone_by_school_id("4")
    assert zone is not None
    ring = zone.geometry["coordinates"][0][0]
    corner_lng, corner_lat = ring[0]
    result = await svc.check_address_in_zones(lat=corner_lat, lng=corner_lng)
    assert [m.school_id for m in result.matches] == ["4"]

    # midpoint of the southern edge
    mid_lng = (ring[0][0] + ring[1][0]) / 2
    result = await svc.check_address_in_zones(lat=corner_lat, lng=mid_lng)
    assert [m.school_id for m in result.matches] == ["4"]


@pytest.mark.asyncio
async def test_zone_lookups(svc) -> None:
    by_school = await svc.get_zone_by_school_id("12")
    assert by_school is not None and by_school.id == "zone-12"
    by_id = await svc.get_zone_by_id("zone-12")
    assert by_id == by_school
    assert await svc.get_zone_by_school_id("5") is None
    assert await svc.get_zone_by_id("zone-999") is None


@pytest.mark.asyncio
async def test_zones_in_bounds_uses_intersection(svc) -> None:
    zones = await svc.get_zones_in_bounds(BBox(174.70, -36.80, 174.80, -36.74))
    assert sorted(z.id for z in zones) == ["zone-12", "zone-13"]

    # an envelope clipping only the edge of a zone still returns it
    ags = await svc.get_zone_by_school_id("1")
    east = ags.geometry["coordinates"][0][0][1][0]
    touching = await svc.get_zones_in_bounds(BBox(east - 0.0001, -36.872, east + 0.01, -36.871))
    assert [z.id for z in touching] == ["zone-1"]
