"""Normalization of /search query parameters."""

from __future__ import annotations

import pytest

from app.core.exceptions import ValidationError
from app.models.enums import Gender, Proprietor, SchoolType
from app.schemas.common import parse_bool
from app.schemas.search import parse_enum_values, search_criteria_query, split_values

pytestmark = pytest.mark.unit


def test_split_values_accepts_csv_and_repeats() -> None:
    assert split_values(["Primary,Secondary", " Primary ", ""]) == ["Primary", "Secondary"]
    assert split_values(None) == []


def test_enum_values_match_value_or_name() -> None:
    assert parse_enum_values("gender", Gender, ["co-ed", "BOYS"]) == (Gender.coed, Gender.boys)
    assert parse_enum_values("proprietor", Proprietor, ["state_integrated"]) == (
        Proprietor.state_integrated,
    )
    with pytest.raises(ValidationError, match="unknown type 'Kindergarten'"):
        parse_enum_values("type", SchoolType, ["Kindergarten"])


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, None), ("true", True), ("1", True), ("YES", True), ("false", False), ("0", False)],
)
def test_parse_bool(raw, expected) -> None:
    assert parse_bool("boarding", raw) is expected


def test_parse_bool_rejects_other_text() -> None:
    with pytest.raises(ValidationError):
        parse_bool("hasZone", "maybe")


def test_defaults() -> None:
    criteria = search_criteria_query()
    assert criteria.q is None
    assert criteria.center is None and criteria.radius_m is None
    assert (criteria.page, criteria.page_size, criteria.sort) == (1, 20, "name")


def test_center_gets_default_radius_and_distance_sort() -> None:
    criteria = search_criteria_query(lat=-36.85, lng=174.76)
    assert criteria.center == (-36.85, 174.76)
    assert criteria.radius_m == 5000
    assert criteria.sort == "distance"


def test_half_a_center_is_rejected() -> None:
    with pytest.raises(ValidationError, match="together"):
        search_criteria_query(lat=-36.85)


def test_out_of_range_coordinates_are_rejected() -> None:
    with pytest.raises(ValidationError):
        search_criteria_query(lat=-95.0, lng=174.76)


def test_negative_radius_is_rejected() -> None:
    with pytest.raises(ValidationError):
        search_criteria_query(lat=-36.85, lng=174.76, radius=-1)


def test_filters_and_clamping() -> None:
    criteria = search_criteria_query(
        q="  grammar ",
        type_=["Secondary,Composite"],
        boarding="false",
        has_zone="true",
        decile=["10", "9,10"],
        page=0,
        page_size=500,
        sort_by="type",
    )
    assert criteria.q == "grammar"
    assert criteria.types == (SchoolType.secondary, SchoolType.composite)
    assert (criteria.boarding, criteria.has_zone) == (False, True)
    assert criteria.deciles == (10, 9)
    assert (criteria.page, criteria.page_size) == (1, 100)
    assert criteria.sort == "type"


def test_out_of_range_bands_are_rejected() -> None:
    with pytest.raises(ValidationError, match="equityIndexBand"):
        search_criteria_query(equity_index_band=["1,5"])


def test_integer_filters_accept_csv_and_reject_text() -> None:
    criteria = search_criteria_query(equity_index_band=["1,2"], decile=["9, 10"])
    assert criteria.equity_index_bands == (1, 2)
    assert criteria.deciles == (9, 10)
    with pytest.raises(ValidationError, match="decile must be an integer"):
        search_criteria_query(decile=["ten"])
