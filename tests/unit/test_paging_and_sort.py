import pytest

from app.utils.paging import clamp_nearby_limit, clamp_page, clamp_page_size
from app.utils.sort import resolve_sort_key

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("raw", "expected"), [(None, 20), (0, 20), (-3, 20), (1, 1), (50, 50), (100, 100), (500, 100)]
)
def test_clamp_page_size(raw, expected) -> None:
    assert clamp_page_size(raw) == expected


@pytest.mark.parametrize(("raw", "expected"), [(None, 1), (0, 1), (-2, 1), (3, 3)])
def test_clamp_page(raw, expected) -> None:
    assert clamp_page(raw) == expected


@pytest.mark.parametrize(("raw", "expected"), [(None, 5), (0, 0), (7, 7), (20, 20), (21, 20)])
def test_clamp_nearby_limit(raw, expected) -> None:
    assert clamp_nearby_limit(raw) == expected


def test_resolve_sort_key_defaults_and_fallbacks() -> None:
    assert resolve_sort_key(None, has_center=False) == "name"
    assert resolve_sort_key("bogus", has_center=True) == "name"
    assert resolve_sort_key("TYPE", has_center=False) == "type"
    assert resolve_sort_key("distance", has_center=True) == "distance"
    # distance without a center point degrades to name
    assert resolve_sort_key("distance", has_center=False) == "name"
