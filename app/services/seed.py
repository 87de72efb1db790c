"""Full-replace seeding of schools and zones."""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pydantic
import structlog
from geoalchemy2.shape import from_shape
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from shapely.geometry import MultiPolygon, Point, Polygon, shape
from shapely.validation import explain_validity
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.exceptions import ValidationError
from app.data.catalog import (
    SCHOOL_RECORDS,
    SOURCE_FILE_ID,
    SOURCE_PROVIDER,
    ZONE_RECORDS,
    parse_year_levels,
)
from app.models import School, Zone
from app.models.enums import Gender, Proprietor, SchoolType

logger = structlog.get_logger(__name__)

SRID = 4326

_SEED_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class LocationSeed(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class SchoolSeed(BaseModel):
    id: str
    name: str
    aka_names: list[str] = Field(default_factory=list)
    type: SchoolType
    year_levels: str | None = None
    gender: Gender
    proprietor: Proprietor
    special_character: str | None = None
    boarding: bool = False
    website_url: str | None = None
    phone: str | None = None
    email: str | None = None
    roll: int | None = None
    equity_index_band: int | None = Field(default=None, ge=1, le=4)
    decile: int | None = Field(default=None, ge=1, le=10)
    address: str | None = None
    suburb: str | None = None
    location: LocationSeed | None = None

    model_config = _SEED_CONFIG


class ZoneSeed(BaseModel):
    id: str | None = None
    school_id: str
    geometry: dict[str, Any]
    last_updated: datetime | None = None
    notes: str | None = None

    model_config = _SEED_CONFIG


class SeedDataset(BaseModel):
    schools: list[SchoolSeed]
    zones: list[ZoneSeed] = Field(default_factory=list)


@dataclass
class SeedSummary:
    schools: int
    zones: int
    # dataset id -> database UUID
    school_ids: dict[str, str] = field(default_factory=dict)


def builtin_dataset() -> SeedDataset:
    return SeedDataset.model_validate({"schools": SCHOOL_RECORDS, "zones": ZONE_RECORDS})


def load_dataset(path: str | Path) -> SeedDataset:
    """Read ``{"schools": [...], "zones": [...]}`` from a JSON file."""

    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValidationError(f"{path}: invalid JSON ({exc.msg})") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ValidationError(f"{path}: cannot read dataset ({exc})") from exc
    try:
        return SeedDataset.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"{path}: {exc.error_count()} invalid record(s)") from exc


def zone_geometry(geometry: dict[str, Any]) -> MultiPolygon:
    """Parse GeoJSON into a valid MultiPolygon, promoting a bare Polygon."""

    try:
        geom = shape(geometry)
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ValidationError(f"unreadable zone geometry: {exc}") from exc
    if isinstance(geom, Polygon):
        geom = MultiPolygon([geom])
    if not isinstance(geom, MultiPolygon):
        raise ValidationError(f"zone geometry must be a Polygon or MultiPolygon, got {geom.geom_type}")
    if geom.is_empty or not geom.is_valid:
        raise ValidationError(f"invalid zone geometry: {explain_validity(geom)}")
    return geom


def _naive_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def build_rows(
    dataset: SeedDataset,
    *,
    source_provider: str,
    source_file_id: str,
    now: datetime | None = None,
) -> tuple[list[School], list[Zone], dict[str, str]]:
    """Validate the dataset and build ORM rows with fresh UUIDs."""

    imported_at = now or datetime.now(timezone.utc)
    id_map: dict[str, str] = {}
    schools: list[School] = []

    for record in dataset.schools:
        if record.id in id_map:
            raise ValidationError(f"duplicate school id {record.id!r}")
        new_id = str(uuid.uuid4())
        id_map[record.id] = new_id
        min_year, max_year = parse_year_levels(record.year_levels)
        location = None
        if record.location is not None:
            location = from_shape(Point(record.location.lng, record.location.lat), srid=SRID)
        schools.append(
            School(
                id=new_id,
                name=record.name,
                aka_names=list(record.aka_names),
                type=record.type,
                year_levels=record.year_levels,
                min_year=min_year,
                max_year=max_year,
                gender=record.gender,
                proprietor=record.proprietor,
                special_character=record.special_character,
                boarding=record.boarding,
                website_url=record.website_url,
                phone=record.phone,
                email=record.email,
                roll=record.roll,
                equity_index_band=record.equity_index_band,
                decile=record.decile,
                address=record.address,
                suburb=record.suburb,
                location=location,
                source_provider=source_provider,
                source_file_id=source_file_id,
                imported_at=imported_at,
            )
        )

    zones: list[Zone] = []
    zoned: set[str] = set()
    for record in dataset.zones:
        school_id = id_map.get(record.school_id)
        if school_id is None:
            raise ValidationError(f"zone references unknown school {record.school_id!r}")
        if school_id in zoned:
            raise ValidationError(f"school {record.school_id!r} has more than one zone")
        zoned.add(school_id)
        zones.append(
            Zone(
                id=str(uuid.uuid4()),
                school_id=school_id,
                geometry=from_shape(zone_geometry(record.geometry), srid=SRID),
                last_updated=_naive_utc(record.last_updated),
                notes=record.notes,
                source_provider=source_provider,
                source_file_id=source_file_id,
                imported_at=imported_at,
            )
        )

    return schools, zones, id_map


async def seed_database(
    session_factory: async_sessionmaker[AsyncSession],
    dataset: SeedDataset,
    *,
    source_provider: str = SOURCE_PROVIDER,
    source_file_id: str = SOURCE_FILE_ID,
) -> SeedSummary:
    """Replace every school and zone in one transaction."""

    schools, zones, id_map = build_rows(
        dataset, source_provider=source_provider, source_file_id=source_file_id
    )

    async with session_factory() as session:
        async with session.begin():
            await session.execute(delete(Zone))
            await session.execute(delete(School))
            session.add_all(schools)
            await session.flush()
            session.add_all(zones)

    logger.info(
        "seed_completed",
        schools=len(schools),
        zones=len(zones),
        source_provider=source_provider,
        source_file_id=source_file_id,
    )
    return SeedSummary(schools=len(schools), zones=len(zones), school_ids=id_map)
