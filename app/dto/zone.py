"""DTOs for enrolment zones and containment checks."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.dto.school import LocationDTO

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ZoneDTO(BaseModel):
    id: str = Field(description="Zone id")
    school_id: str = Field(description="Owning school id")
    geometry: dict[str, Any] = Field(
        description="GeoJSON MultiPolygon; coordinates are [lng, lat] pairs, rings closed"
    )
    last_updated: datetime | None = Field(default=None, description="Last boundary revision")
    notes: str | None = None

    model_config = _CAMEL


class ZoneMatchDTO(BaseModel):
    school_id: str = Field(description="School whose zone contains the point")
    school_name: str = Field(description="School name")
    zone_last_updated: str | None = Field(default=None, description="YYYY-MM-DD, date only")

    model_config = _CAMEL


class ZoneCheckDTO(BaseModel):
    query_point: LocationDTO = Field(description="The point that was checked")
    matches: list[ZoneMatchDTO] = Field(default_factory=list)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "queryPoint": {"lat": -36.8717, "lng": 174.7708},
                    "matches": [
                        {
                            "schoolId": "1",
                            "schoolName": "Auckland Grammar School",
                            "zoneLastUpdated": "2024-01-15",
                        }
                    ],
                }
            ]
        },
    )
