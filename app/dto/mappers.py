"""Map database rows into canonical DTOs.

This is the only place where database coordinates are converted: PostGIS
stores points as (x=lng, y=lat) and the API exposes ``{lat, lng}``. Zone
geometry stays GeoJSON (``[lng, lat]``) on both sides.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

from app.dto import LocationDTO, SchoolDTO, ZoneDTO, ZoneMatchDTO
from app.models import School


def _location(lat: float | None, lng: float | None) -> LocationDTO | None:
    if lat is None or lng is None:
        return None
    return LocationDTO(lat=float(lat), lng=float(lng))


def zone_date(value: datetime | date | None) -> str | None:
    """Render a zone revision timestamp as a bare ``YYYY-MM-DD`` date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def map_school(
    school: School,
    *,
    lat: float | None,
    lng: float | None,
    zone_id: str | None,
    distance_m: float | None = None,
) -> SchoolDTO:
    """Build a SchoolDTO from the ORM row and the computed columns next to it.

    ``lat``/``lng`` are ST_Y/ST_X of the stored point; ``zone_id`` comes from the
    zones table, so ``has_zone`` is derived rather than stored.
    """
    return SchoolDTO(
        id=str(school.id),
        name=school.name,
        aka_names=list(school.aka_names or []),
        type=school.type,
        year_levels=school.year_levels,
        min_year=school.min_year,
        max_year=school.max_year,
        gender=school.gender,
        proprietor=school.proprietor,
        special_character=school.special_character,
        boarding=bool(school.boarding),
        website_url=school.website_url,
        phone=school.phone,
        email=school.email,
        roll=school.roll,
        equity_index_band=school.equity_index_band,
        decile=school.decile,
        address=school.address,
        suburb=school.suburb,
        location=_location(lat, lng),
        zone_id=str(zone_id) if zone_id is not None else None,
        has_zone=zone_id is not None,
        distance_meters=float(distance_m) if distance_m is not None else None,
        source_provider=school.source_provider,
        source_file_id=school.source_file_id,
    )


def map_zone(row: Mapping[str, Any]) -> ZoneDTO:
    """``row`` carries id, school_id, geojson (ST_AsGeoJSON text), last_updated, notes."""
    geojson = row["geojson"]
    geometry = json.loads(geojson) if isinstance(geojson, str) else dict(geojson)
    return ZoneDTO(
        id=str(row["id"]),
        school_id=str(row["school_id"]),
        geometry=geometry,
        last_updated=row.get("last_updated"),
        notes=row.get("notes"),
    )


def map_zone_match(row: Mapping[str, Any]) -> ZoneMatchDTO:
    return ZoneMatchDTO(
        school_id=str(row["school_id"]),
        school_name=str(row["school_name"]),
        zone_last_updated=zone_date(row.get("last_updated")),
    )
