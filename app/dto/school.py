"""Canonical school record returned by every school endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.models.enums import Gender, Proprietor, SchoolType


class LocationDTO(BaseModel):
    """A point as ``{lat, lng}``. Geometry payloads use ``[lng, lat]`` instead."""

    lat: float = Field(description="Latitude (WGS84)")
    lng: float = Field(description="Longitude (WGS84)")


class SchoolDTO(BaseModel):
    id: str = Field(description="School id")
    name: str = Field(description="Display name")
    aka_names: list[str] = Field(default_factory=list, description="Alternate names, in order")
    type: SchoolType = Field(description="Primary / Intermediate / Secondary / Composite")
    year_levels: str | None = Field(default=None, description='Year range as text, e.g. "Y1-6"')
    min_year: int | None = Field(default=None, description="Lowest year level")
    max_year: int | None = Field(default=None, description="Highest year level")
    gender: Gender = Field(description="Co-ed / Boys / Girls")
    proprietor: Proprietor = Field(description="State / State-Integrated / Private")
    special_character: str | None = Field(default=None, description="Special character, if any")
    boarding: bool = Field(default=False, description="Offers boarding")
    website_url: str | None = None
    phone: str | None = None
    email: str | None = None
    roll: int | None = Field(default=None, description="Student count")
    equity_index_band: int | None = Field(default=None, ge=1, le=4, description="1 = most disadvantaged")
    decile: int | None = Field(default=None, ge=1, le=10, description="Legacy decile, 1 = lowest")
    address: str | None = None
    suburb: str | None = None
    location: LocationDTO | None = Field(default=None, description="Absent when not geocoded")
    zone_id: str | None = Field(default=None, description="Enrolment zone id, if the school has one")
    has_zone: bool = Field(default=False, description="True iff a zone references this school")
    distance_meters: float | None = Field(
        default=None, description="Great-circle distance from the query center (m)"
    )
    source_provider: str | None = Field(default=None, description="Import provenance")
    source_file_id: str | None = Field(default=None, description="Import provenance")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
