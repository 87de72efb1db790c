"""The fixed Auckland dataset behind the in-memory backends."""

from __future__ import annotations

import itertools

import pytest

from app.core.exceptions import ValidationError
from app.data.catalog import load_catalog, parse_year_levels, square_zone

pytestmark = pytest.mark.unit


def test_catalog_has_fourteen_schools_and_seven_zones() -> None:
    catalog = load_catalog()
    assert len(catalog.schools) == 14
    assert len(catalog.zones) == 7
    assert len({s.id for s in catalog.schools}) == 14


def test_has_zone_iff_a_zone_references_the_school() -> None:
    catalog = load_catalog()
    zoned = {z.dto.school_id: z.dto.id for z in catalog.zones}
    for school in catalog.schools:
        assert school.has_zone == (school.id in zoned)
        assert school.zone_id == zoned.get(school.id)


def test_zone_rings_are_closed_and_in_lng_lat_order() -> None:
    catalog = load_catalog()
    for zone in catalog.zones:
        geometry = zone.dto.geometry
        assert geometry["type"] == "MultiPolygon"
        ring = geometry["coordinates"][0][0]
        assert ring[0] == ring[-1]
        school = catalog.school_by_id(zone.dto.school_id)
        assert school is not None and school.location is not None
        # centroid is the school point, x = lng
        centroid = zone.shape.centroid
        assert centroid.x == pytest.approx(school.location.lng)
        assert centroid.y == pytest.approx(school.location.lat)


def test_zones_are_valid_and_do_not_overlap() -> None:
    shapes = [z.shape for z in load_catalog().zones]
    assert all(s.is_valid for s in shapes)
    for a, b in itertools.combinations(shapes, 2):
        assert not a.intersects(b)


def test_school_without_location_is_present() -> None:
    missing = [s for s in load_catalog().schools if s.location is None]
    assert [s.name for s in missing] == ["Te Kura"]


def test_min_and_max_year_follow_year_levels() -> None:
    ags = load_catalog().school_by_id("1")
    assert ags is not None
    assert (ags.year_levels, ags.min_year, ags.max_year) == ("Y9-13", 9, 13)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Y1-6", (1, 6)),
        ("Y7", (7, 7)),
        (" y9 - 13 ", (9, 13)),
        ("Years 1-13", (1, 13)),
        (None, (None, None)),
        ("", (None, None)),
        ("junior", (None, None)),
    ],
)
def test_parse_year_levels(text, expected) -> None:
    assert parse_year_levels(text) == expected


def test_parse_year_levels_rejects_reversed_range() -> None:
    with pytest.raises(ValidationError):
        parse_year_levels("Y13-9")


def test_square_zone_is_centred_on_the_point() -> None:
    geometry = square_zone(-36.0, 174.0, half_size=0.5)
    ring = geometry["coordinates"][0][0]
    assert ring[0] == [173.5, -36.5]
    assert ring[2] == [174.5, -35.5]
    assert len(ring) == 5
