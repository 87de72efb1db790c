from __future__ import annotations

import math

import pytest

from app.core.exceptions import ValidationError
from app.utils.geo import BBox, haversine_distance_m, parse_bbox

pytestmark = pytest.mark.unit

QUEEN_STREET = (-36.8485, 174.7633)


def test_haversine_is_zero_for_identical_points() -> None:
    assert haversine_distance_m(QUEEN_STREET, QUEEN_STREET) == 0.0


def test_haversine_matches_known_distance() -> None:
    # One degree of latitude on a 6,371 km sphere.
    assert haversine_distance_m((0.0, 0.0), (1.0, 0.0)) == pytest.approx(111_194.93, rel=1e-6)


def test_haversine_is_symmetric() -> None:
    ponsonby = (-36.8478, 174.7428)
    assert haversine_distance_m(QUEEN_STREET, ponsonby) == pytest.approx(
        haversine_distance_m(ponsonby, QUEEN_STREET)
    )
    assert haversine_distance_m(QUEEN_STREET, ponsonby) == pytest.approx(1826, abs=5)


def test_haversine_handles_antipodes() -> None:
    d = haversine_distance_m((0.0, 0.0), (0.0, 180.0))
    assert d == pytest.approx(math.pi * 6_371_000.0)


def test_parse_bbox_reads_lng_lat_order() -> None:
    bbox = parse_bbox("174.7, -36.9, 174.8,-36.8")
    assert bbox == BBox(min_lng=174.7, min_lat=-36.9, max_lng=174.8, max_lat=-36.8)


@pytest.mark.parametrize(
    "raw",
    ["", "1,2,3", "a,b,c,d", "174.8,-36.9,174.7,-36.8", "1,2,3,nan", "1,2,3,4,5"],
)
def test_parse_bbox_rejects_malformed_values(raw: str) -> None:
    with pytest.raises(ValidationError):
        parse_bbox(raw)


def test_bbox_contains_is_inclusive_on_edges() -> None:
    bbox = BBox(174.7, -36.9, 174.8, -36.8)
    assert bbox.contains(-36.9, 174.7)
    assert bbox.contains(-36.8, 174.8)
    assert bbox.contains(-36.85, 174.75)
    assert not bbox.contains(-36.7999, 174.75)
