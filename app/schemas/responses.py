# app/schemas/responses.py
"""Response envelopes that wrap the canonical DTOs."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.dto import GeocodeResultDTO, LocationDTO, SchoolDTO, ZoneDTO

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NearbyResponse(BaseModel):
    center: LocationDTO = Field(description="Query point")
    radius: float = Field(description="Effective radius in metres")
    schools: list[SchoolDTO] = Field(description="Closest first, at most 20")

    model_config = _CAMEL


class ZonesInBoundsResponse(BaseModel):
    zones: list[ZoneDTO]

    model_config = _CAMEL


class GeocodeResponse(BaseModel):
    query: str = Field(description="The query as received")
    results: list[GeocodeResultDTO]

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "query": "queen street",
                    "results": [
                        {
                            "address": "Queen Street, Auckland Central, Auckland 1010",
                            "location": {"lat": -36.8485, "lng": 174.7633},
                            "confidence": 90,
                        }
                    ],
                }
            ]
        },
    )


class ReverseGeocodeResponse(BaseModel):
    location: LocationDTO
    address: str | None = Field(default=None, description="Display address, if resolved")

    model_config = _CAMEL
