# app/schemas/search.py
from __future__ import annotations

import math
from collections.abc import Iterable
from enum import Enum
from typing import Annotated, TypeVar

from fastapi import Query

from app.core.exceptions import ValidationError
from app.dto import SearchCriteria
from app.models.enums import Gender, Proprietor, SchoolType
from app.schemas.common import check_point, parse_bool
from app.utils.geo import DEFAULT_RADIUS_M, parse_bbox
from app.utils.paging import clamp_page, clamp_page_size
from app.utils.sort import resolve_sort_key

__all__ = ["search_criteria_query", "split_values", "parse_enum_values"]

E = TypeVar("E", bound=Enum)


def split_values(raw: Iterable[str] | None) -> list[str]:
    """Accept both ``type=A&type=B`` and ``type=A,B``; drop blanks and duplicates."""

    out: list[str] = []
    for chunk in raw or []:
        for part in chunk.split(","):
            value = part.strip()
            if value and value not in out:
                out.append(value)
    return out


def parse_enum_values(name: str, enum_cls: type[E], raw: Iterable[str] | None) -> tuple[E, ...]:
    """Match enum values or member names case-insensitively (``co-ed``, ``coed``)."""

    lookup: dict[str, E] = {}
    for member in enum_cls:
        lookup[str(member.value).lower()] = member
        lookup[member.name.lower()] = member
    parsed: list[E] = []
    for value in split_values(raw):
        member = lookup.get(value.lower())
        if member is None:
            allowed = ", ".join(str(m.value) for m in enum_cls)
            raise ValidationError(f"unknown {name} {value!r}; expected one of: {allowed}")
        if member not in parsed:
            parsed.append(member)
    return tuple(parsed)


def _parse_ints(name: str, raw: list[str] | None, low: int, high: int) -> tuple[int, ...]:
    """Integers from repeated or comma-separated values, each within [low, high]."""

    values: list[int] = []
    for part in split_values(raw):
        try:
            value = int(part)
        except ValueError:
            raise ValidationError(f"{name} must be an integer, got {part!r}") from None
        if not low <= value <= high:
            raise ValidationError(f"{name} must be between {low} and {high}")
        if value not in values:
            values.append(value)
    return tuple(values)


def search_criteria_query(
    q: Annotated[str | None, Query(description="Substring of name, address or suburb")] = None,
    lat: Annotated[float | None, Query(description="Center latitude")] = None,
    lng: Annotated[float | None, Query(description="Center longitude")] = None,
    radius: Annotated[
        float | None, Query(description="Radius in metres around the center (default 5000)")
    ] = None,
    bbox: Annotated[str | None, Query(description="minLng,minLat,maxLng,maxLat")] = None,
    type_: Annotated[
        list[str] | None,
        Query(alias="type", description="Primary, Intermediate, Secondary, Composite"),
    ] = None,
    gender: Annotated[list[str] | None, Query(description="Co-ed, Boys, Girls")] = None,
    proprietor: Annotated[
        list[str] | None, Query(description="State, State-Integrated, Private")
    ] = None,
    boarding: Annotated[str | None, Query(description="true / false")] = None,
    has_zone: Annotated[str | None, Query(alias="hasZone", description="true / false")] = None,
    equity_index_band: Annotated[
        list[str] | None, Query(alias="equityIndexBand", description="1..4")
    ] = None,
    decile: Annotated[list[str] | None, Query(description="1..10")] = None,
    page: Annotated[int | None, Query(description="Page number (1-based)")] = None,
    page_size: Annotated[
        int | None, Query(alias="pageSize", description="Results per page (max 100)")
    ] = None,
    sort_by: Annotated[
        str | None, Query(alias="sortBy", description="name | type | distance")
    ] = None,
) -> SearchCriteria:
    """Normalize /search query parameters into SearchCriteria.

    Malformed values raise ValidationError (400); paging is clamped rather
    than rejected.
    """

    center: tuple[float, float] | None = None
    radius_m: float | None = None
    if (lat is None) != (lng is None):
        raise ValidationError("lat and lng must be given together")
    if lat is not None and lng is not None:
        center = check_point(lat, lng)
        radius_m = DEFAULT_RADIUS_M if radius is None else float(radius)
        if not math.isfinite(radius_m) or radius_m < 0:
            raise ValidationError("radius must be a non-negative number of metres")

    text = q.strip() if q else None

    return SearchCriteria(
        q=text or None,
        types=parse_enum_values("type", SchoolType, type_),
        genders=parse_enum_values("gender", Gender, gender),
        proprietors=parse_enum_values("proprietor", Proprietor, proprietor),
        boarding=parse_bool("boarding", boarding),
        has_zone=parse_bool("hasZone", has_zone),
        equity_index_bands=_parse_ints("equityIndexBand", equity_index_band, 1, 4),
        deciles=_parse_ints("decile", decile, 1, 10),
        center=center,
        radius_m=radius_m,
        bbox=parse_bbox(bbox) if bbox else None,
        page=clamp_page(page),
        page_size=clamp_page_size(page_size),
        sort=resolve_sort_key(sort_by, has_center=center is not None),
    )
