"""Fixed Auckland dataset served by the in-memory backends and used as seed data.

Records are kept in the same camelCase shape the seed command accepts from a
JSON file. School locations are ``{lat, lng}``; zone geometry is GeoJSON with
``[lng, lat]`` pairs. ``load_catalog`` is the only place these are turned into
DTOs and Shapely shapes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Any

from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from app.core.exceptions import ValidationError
from app.dto import LocationDTO, SchoolDTO, ZoneDTO

SOURCE_PROVIDER = "builtin"
SOURCE_FILE_ID = "auckland-sample"

ZONE_HALF_SIZE_DEG = 0.004

_YEAR_LEVELS_RE = re.compile(r"^\s*Y(?:ears?)?\s*(\d{1,2})\s*(?:-\s*(\d{1,2}))?\s*$", re.IGNORECASE)


def parse_year_levels(text: str | None) -> tuple[int | None, int | None]:
    """``"Y1-6"`` -> (1, 6); ``"Y7"`` -> (7, 7); anything else -> (None, None)."""

    if not text:
        return None, None
    match = _YEAR_LEVELS_RE.match(text)
    if match is None:
        return None, None
    low = int(match.group(1))
    high = int(match.group(2)) if match.group(2) else low
    if low > high:
        raise ValidationError(f"year levels out of order: {text!r}")
    return low, high


def square_zone(lat: float, lng: float, half_size: float = ZONE_HALF_SIZE_DEG) -> dict[str, Any]:
    """Closed square MultiPolygon centred on (lat, lng)."""

    ring = [
        [lng - half_size, lat - half_size],
        [lng + half_size, lat - half_size],
        [lng + half_size, lat + half_size],
        [lng - half_size, lat + half_size],
        [lng - half_size, lat - half_size],
    ]
    return {"type": "MultiPolygon", "coordinates": [[ring]]}


SCHOOL_RECORDS: list[dict[str, Any]] = [
    {
        "id": "1",
        "name": "Auckland Grammar School",
        "akaNames": ["AGS", "Grammar"],
        "type": "Secondary",
        "yearLevels": "Y9-13",
        "gender": "Boys",
        "proprietor": "State",
        "boarding": False,
        "websiteUrl": "https://www.ags.school.nz",
        "phone": "09 623 5400",
        "roll": 2600,
        "equityIndexBand": 4,
        "decile": 10,
        "address": "87 Mountain Road",
        "suburb": "Epsom",
        "location": {"lat": -36.8717, "lng": 174.7708},
    },
    {
        "id": "2",
        "name": "Epsom Girls Grammar School",
        "akaNames": ["EGGS"],
        "type": "Secondary",
        "yearLevels": "Y9-13",
        "gender": "Girls",
        "proprietor": "State",
        "boarding": False,
        "websiteUrl": "https://www.eggs.school.nz",
        "phone": "09 630 5963",
        "roll": 2200,
        "equityIndexBand": 4,
        "decile": 9,
        "address": "Silver Road",
        "suburb": "Epsom",
        "location": {"lat": -36.8811, "lng": 174.7738},
    },
    {
        "id": "3",
        "name": "Mount Albert Grammar School",
        "akaNames": ["MAGS"],
        "type": "Secondary",
        "yearLevels": "Y9-13",
        "gender": "Co-ed",
        "proprietor": "State",
        "boarding": True,
        "websiteUrl": "https://www.mags.school.nz",
        "phone": "09 846 2044",
        "roll": 3200,
        "equityIndexBand": 3,
        "decile": 7,
        "address": "Alberton Avenue",
        "suburb": "Mount Albert",
        "location": {"lat": -36.8812, "lng": 174.7186},
    },
    {
        "id": "4",
        "name": "Ponsonby Primary School",
        "type": "Primary",
        "yearLevels": "Y1-6",
        "gender": "Co-ed",
        "proprietor": "State",
        "boarding": False,
        "roll": 600,
        "equityIndexBand": 4,
        "decile": 10,
        "address": "44 Curran Street",
        "suburb": "Herne Bay",
        "location": {"lat": -36.8478, "lng": 174.7428},
    },
    {
        "id": "5",
        "name": "Newmarket School",
        "type": "Primary",
        "yearLevels": "Y1-6",
        "gender": "Co-ed",
        "proprietor": "State",
        "boarding": False,
        "roll": 350,
        "equityIndexBand": 3,
        "decile": 9,
        "address": "Gillies Avenue",
        "suburb": "Newmarket",
        "location": {"lat": -36.8695, "lng": 174.7781},
    },
    {
        "id": "6",
        "name": "Remuera Intermediate",
        "type": "Intermediate",
        "yearLevels": "Y7-8",
        "gender": "Co-ed",
        "proprietor": "State",
        "boarding": False,
        "roll": 900,
        "equityIndexBand": 4,
        "decile": 10,
        "address": "Ascot Avenue",
        "suburb": "Remuera",
        "location": {"lat": -36.8770, "lng": 174.7990},
    },
    {
        "id": "7",
        "name": "Sacred Heart College",
        "type": "Secondary",
        "yearLevels": "Y7-13",
        "gender": "Boys",
        "proprietor": "State-Integrated",
        "specialCharacter": "Catholic",
        "boarding": True,
        "roll": 1300,
        "equityIndexBand": 3,
        "decile": 7,
        "address": "250 West Tamaki Road",
        "suburb": "Glen Innes",
        "location": {"lat": -36.8650, "lng": 174.8690},
    },
    {
        "id": "8",
        "name": "King's College",
        "type": "Secondary",
        "yearLevels": "Y9-13",
        "gender": "Co-ed",
        "proprietor": "Private",
        "specialCharacter": "Anglican",
        "boarding": True,
        "roll": 1050,
        "address": "Golf Avenue",
        "suburb": "Otahuhu",
        "location": {"lat": -36.9420, "lng": 174.8380},
    },
    {
        "id": "9",
        "name": "Diocesan School for Girls",
        "akaNames": ["Dio"],
        "type": "Composite",
        "yearLevels": "Y1-13",
        "gender": "Girls",
        "proprietor": "Private",
        "specialCharacter": "Anglican",
        "boarding": False,
        "roll": 1600,
        "address": "Clyde Street",
        "suburb": "Epsom",
        "location": {"lat": -36.8790, "lng": 174.7830},
    },
    {
        "id": "10",
        "name": "Auckland Normal Intermediate",
        "type": "Intermediate",
        "yearLevels": "Y7-8",
        "gender": "Co-ed",
        "proprietor": "State",
        "boarding": False,
        "roll": 700,
        "equityIndexBand": 4,
        "decile": 9,
        "address": "Kowhai Road",
        "suburb": "Epsom",
        "location": {"lat": -36.8770, "lng": 174.7650},
    },
    {
        "id": "11",
        "name": "Glendowie College",
        "type": "Secondary",
        "yearLevels": "Y9-13",
        "gender": "Co-ed",
        "proprietor": "State",
        "boarding": False,
        "roll": 1200,
        "equityIndexBand": 4,
        "decile": 10,
        "address": "Crossfield Road",
        "suburb": "Glendowie",
        "location": {"lat": -36.8590, "lng": 174.8720},
    },
    {
        "id": "12",
        "name": "Takapuna Grammar School",
        "type": "Secondary",
        "yearLevels": "Y9-13",
        "gender": "Co-ed",
        "proprietor": "State",
        "boarding": False,
        "roll": 1900,
        "equityIndexBand": 3,
        "decile": 9,
        "address": "210 Lake Road",
        "suburb": "Belmont",
        "location": {"lat": -36.7920, "lng": 174.7790},
    },
    {
        "id": "13",
        "name": "Westlake Boys High School",
        "type": "Secondary",
        "yearLevels": "Y9-13",
        "gender": "Boys",
        "proprietor": "State",
        "boarding": False,
        "roll": 2400,
        "equityIndexBand": 4,
        "decile": 10,
        "address": "30 Forrest Hill Road",
        "suburb": "Forrest Hill",
        "location": {"lat": -36.7590, "lng": 174.7460},
    },
    {
        "id": "14",
        "name": "Te Kura",
        "akaNames": ["The Correspondence School"],
        "type": "Composite",
        "yearLevels": "Y1-13",
        "gender": "Co-ed",
        "proprietor": "State",
        "boarding": False,
        "websiteUrl": "https://www.tekura.school.nz",
        "roll": 24000,
        "equityIndexBand": 2,
    },
]

_ZONED = [
    ("1", datetime(2024, 1, 15)),
    ("2", datetime(2024, 1, 15)),
    ("3", datetime(2023, 11, 1)),
    ("4", datetime(2024, 3, 4)),
    ("6", datetime(2023, 9, 20)),
    ("12", datetime(2024, 2, 12)),
    ("13", datetime(2024, 2, 12)),
]


def _zone_records() -> list[dict[str, Any]]:
    by_id = {record["id"]: record for record in SCHOOL_RECORDS}
    records = []
    for school_id, revised in _ZONED:
        point = by_id[school_id]["location"]
        records.append(
            {
                "id": f"zone-{school_id}",
                "schoolId": school_id,
                "geometry": square_zone(point["lat"], point["lng"]),
                "lastUpdated": revised,
            }
        )
    return records


ZONE_RECORDS: list[dict[str, Any]] = _zone_records()


@dataclass(frozen=True)
class CatalogZone:
    dto: ZoneDTO
    shape: BaseGeometry


@dataclass(frozen=True)
class Catalog:
    schools: list[SchoolDTO]
    zones: list[CatalogZone]

    def school_by_id(self, school_id: str) -> SchoolDTO | None:
        return next((s for s in self.schools if s.id == school_id), None)


def _school_dto(record: dict[str, Any], zone_id: str | None) -> SchoolDTO:
    min_year, max_year = parse_year_levels(record.get("yearLevels"))
    location = record.get("location")
    return SchoolDTO(
        id=record["id"],
        name=record["name"],
        aka_names=list(record.get("akaNames", [])),
        type=record["type"],
        year_levels=record.get("yearLevels"),
        min_year=min_year,
        max_year=max_year,
        gender=record["gender"],
        proprietor=record["proprietor"],
        special_character=record.get("specialCharacter"),
        boarding=bool(record.get("boarding", False)),
        website_url=record.get("websiteUrl"),
        phone=record.get("phone"),
        email=record.get("email"),
        roll=record.get("roll"),
        equity_index_band=record.get("equityIndexBand"),
        decile=record.get("decile"),
        address=record.get("address"),
        suburb=record.get("suburb"),
        location=LocationDTO(lat=location["lat"], lng=location["lng"]) if location else None,
        zone_id=zone_id,
        has_zone=zone_id is not None,
        source_provider=SOURCE_PROVIDER,
        source_file_id=SOURCE_FILE_ID,
    )


@lru_cache(maxsize=1)
def load_catalog() -> Catalog:
    zones = [
        CatalogZone(
            dto=ZoneDTO(
                id=record["id"],
                school_id=record["schoolId"],
                geometry=record["geometry"],
                last_updated=record.get("lastUpdated"),
                notes=record.get("notes"),
            ),
            shape=shape(record["geometry"]),
        )
        for record in ZONE_RECORDS
    ]
    zone_by_school = {zone.dto.school_id: zone.dto.id for zone in zones}
    schools = [_school_dto(record, zone_by_school.get(record["id"])) for record in SCHOOL_RECORDS]
    return Catalog(schools=schools, zones=zones)


__all__ = [
    "SCHOOL_RECORDS",
    "ZONE_RECORDS",
    "Catalog",
    "CatalogZone",
    "load_catalog",
    "parse_year_levels",
    "square_zone",
]
