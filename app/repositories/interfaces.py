"""Repository abstractions for the service layer."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from app.dto import GeocodeResultDTO, SearchCriteria
from app.models import School
from app.utils.geo import BBox


@dataclass
class SchoolRow:
    """A school plus the columns computed alongside it."""

    school: School
    lat: float | None
    lng: float | None
    zone_id: str | None
    distance_m: float | None = None


@dataclass
class CachedAddressRow:
    normalized_address: str
    lat: float | None
    lng: float | None
    confidence: int | None
    provider: str | None
    created_at: datetime


class SchoolReadRepository(Protocol):
    """Read-only access to the school catalog."""

    async def search(self, criteria: SearchCriteria) -> tuple[list[SchoolRow], int]: ...

    async def get_by_id(self, school_id: str) -> SchoolRow | None: ...

    async def find_nearby(
        self, *, lat: float, lng: float, radius_m: float, limit: int
    ) -> list[SchoolRow]: ...


class ZoneReadRepository(Protocol):
    """Read-only access to enrolment zones.

    Rows are mappings with ``id``, ``school_id``, ``geojson``, ``last_updated``
    and ``notes``; containment rows carry ``school_id``, ``school_name`` and
    ``last_updated``.
    """

    async def containing_point(self, *, lat: float, lng: float) -> list[Mapping[str, Any]]: ...

    async def get_by_school_id(self, school_id: str) -> Mapping[str, Any] | None: ...

    async def get_by_id(self, zone_id: str) -> Mapping[str, Any] | None: ...

    async def intersecting(self, bbox: BBox) -> list[Mapping[str, Any]]: ...


class AddressCacheRepository(Protocol):
    async def fetch_fresh(
        self, query_string: str, *, cutoff: datetime
    ) -> list[CachedAddressRow]: ...

    async def insert_results(
        self,
        query_string: str,
        results: Sequence[GeocodeResultDTO],
        *,
        provider: str,
        now: datetime,
        cutoff: datetime,
    ) -> None: ...
