"""Search request criteria and the paged search response."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.dto.school import SchoolDTO
from app.models.enums import Gender, Proprietor, SchoolType
from app.utils.geo import BBox
from app.utils.sort import SortKey


@dataclass(frozen=True)
class SearchCriteria:
    """Normalized search request, consumed identically by both backends.

    Empty tuples mean "no filter"; ``None`` booleans mean "either".
    ``radius_m`` is only meaningful together with ``center`` (lat, lng).
    """

    q: str | None = None
    types: tuple[SchoolType, ...] = ()
    genders: tuple[Gender, ...] = ()
    proprietors: tuple[Proprietor, ...] = ()
    boarding: bool | None = None
    has_zone: bool | None = None
    equity_index_bands: tuple[int, ...] = ()
    deciles: tuple[int, ...] = ()
    center: tuple[float, float] | None = None
    radius_m: float | None = None
    bbox: BBox | None = None
    page: int = 1
    page_size: int = 20
    sort: SortKey = "name"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class SearchPageDTO(BaseModel):
    """One page of search results plus the unpaged total."""

    results: list[SchoolDTO] = Field(description="Matching schools for this page")
    total: int = Field(default=0, description="Count of all matches, ignoring pagination")
    page: int = Field(default=1, description="Page number (1-based)")
    page_size: int = Field(default=20, description="Effective page size (max 100)")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "results": [
                        {
                            "id": "1",
                            "name": "Auckland Grammar School",
                            "type": "Secondary",
                            "gender": "Boys",
                            "proprietor": "State",
                            "boarding": False,
                            "location": {"lat": -36.8717, "lng": 174.7708},
                            "hasZone": True,
                        }
                    ],
                    "total": 1,
                    "page": 1,
                    "pageSize": 20,
                }
            ]
        },
    )
