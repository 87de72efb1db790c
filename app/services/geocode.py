"""Geocoding with a PostGIS-backed address cache."""

from __future__ import annotations

import unicodedata
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
import structlog

from app.core.exceptions import ValidationError
from app.dto import GeocodeResultDTO, LocationDTO
from app.infra.unit_of_work import UnitOfWork
from app.repositories.interfaces import CachedAddressRow
from app.services.db_errors import translate_db_errors

logger = structlog.get_logger(__name__)

UnitOfWorkFactory = Callable[[], UnitOfWork]

MIN_QUERY_LENGTH = 3
# address_cache.query_string is String(500)
MAX_QUERY_LENGTH = 500
DEFAULT_CONFIDENCE = 50

# minLng,minLat,maxLng,maxLat around greater Auckland
_AUCKLAND_VIEWBOX = "174.4,-37.3,175.3,-36.4"


def normalize_query(query: str) -> str:
    """Cache key for a free-text query: NFKC, collapsed whitespace, casefolded."""

    if not query:
        return ""
    normalized = unicodedata.normalize("NFKC", query).replace("\x00", "")
    return " ".join(normalized.split()).casefold()


def validate_query(query: str | None) -> str:
    normalized = normalize_query(query or "")
    if not normalized:
        raise ValidationError("query parameter is required")
    if len(normalized) < MIN_QUERY_LENGTH:
        raise ValidationError(f"query must be at least {MIN_QUERY_LENGTH} characters long")
    if len(normalized) > MAX_QUERY_LENGTH:
        raise ValidationError(f"query must be at most {MAX_QUERY_LENGTH} characters long")
    return normalized


def _confidence(importance: Any) -> int:
    try:
        value = round(float(importance) * 100)
    except (TypeError, ValueError):
        return DEFAULT_CONFIDENCE
    return max(0, min(100, value))


class NominatimGeocoder:
    """Thin httpx client for the Nominatim search and reverse endpoints.

    Failures are logged and reported as "no result"; there are no retries.
    """

    provider = "nominatim"

    def __init__(
        self,
        *,
        base_url: str,
        user_agent: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._timeout = timeout
        self._client = client

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self._base_url}{path}"
        headers = {"User-Agent": self._user_agent}
        try:
            if self._client is not None:
                response = await self._client.get(
                    url, params=params, headers=headers, timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("geocoder_request_failed", path=path, error=str(exc))
            return None

        if not response.is_success:
            logger.warning("geocoder_bad_status", path=path, status=response.status_code)
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning("geocoder_invalid_json", path=path)
            return None

    async def search(self, query: str) -> list[GeocodeResultDTO]:
        payload = await self._get_json(
            "/search",
            {
                "q": query,
                "format": "jsonv2",
                "countrycodes": "nz",
                "viewbox": _AUCKLAND_VIEWBOX,
                "bounded": 1,
                "limit": 5,
            },
        )
        if not isinstance(payload, list):
            return []

        results: list[GeocodeResultDTO] = []
        for item in payload:
            if not isinstance(item, dict):
                continue
            try:
                lat = float(item["lat"])
                lng = float(item["lon"])
            except (KeyError, TypeError, ValueError):
                logger.warning("geocoder_invalid_result", item=item)
                continue
            address = str(item.get("display_name") or "").strip()
            if not address:
                continue
            results.append(
                GeocodeResultDTO(
                    address=address,
                    location=LocationDTO(lat=lat, lng=lng),
                    confidence=_confidence(item.get("importance")),
                )
            )
        return results

    async def reverse(self, *, lat: float, lng: float) -> str | None:
        payload = await self._get_json(
            "/reverse", {"lat": lat, "lon": lng, "format": "jsonv2", "zoom": 18}
        )
        if not isinstance(payload, dict):
            return None
        address = payload.get("display_name")
        return str(address) if address else None


def _cached_to_dto(row: CachedAddressRow) -> GeocodeResultDTO | None:
    if row.lat is None or row.lng is None or not row.normalized_address:
        return None
    return GeocodeResultDTO(
        address=row.normalized_address,
        location=LocationDTO(lat=row.lat, lng=row.lng),
        confidence=row.confidence if row.confidence is not None else DEFAULT_CONFIDENCE,
    )


class CachedGeocodingService:
    """Address cache in front of an external geocoder.

    Cache rows older than ``ttl`` are ignored on read and superseded on write.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        geocoder: NominatimGeocoder,
        *,
        ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._geocoder = geocoder
        self._ttl = ttl
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def geocode_address(self, query: str) -> list[GeocodeResultDTO]:
        key = validate_query(query)
        now = self._clock()
        cutoff = now - self._ttl

        with translate_db_errors("geocode cache read"):
            async with self._uow_factory() as uow:
                rows = await uow.address_cache.fetch_fresh(key, cutoff=cutoff)
        cached = [dto for dto in (_cached_to_dto(row) for row in rows) if dto is not None]
        if cached:
            logger.info("geocode_cache_hit", query=key, results=len(cached))
            return cached

        logger.info("geocode_cache_miss", query=key)
        results = await self._geocoder.search(key)
        if results:
            with translate_db_errors("geocode cache write"):
                async with self._uow_factory() as uow:
                    await uow.address_cache.insert_results(
                        key,
                        results,
                        provider=self._geocoder.provider,
                        now=now,
                        cutoff=cutoff,
                    )
        return results

    async def reverse_geocode(self, *, lat: float, lng: float) -> str | None:
        return await self._geocoder.reverse(lat=lat, lng=lng)


MOCK_ADDRESSES: list[GeocodeResultDTO] = [
    GeocodeResultDTO(
        address="Queen Street, Auckland Central, Auckland 1010",
        location=LocationDTO(lat=-36.8485, lng=174.7633),
        confidence=90,
    ),
    GeocodeResultDTO(
        address="Mission Bay, Auckland 1071",
        location=LocationDTO(lat=-36.8578, lng=174.8270),
        confidence=85,
    ),
    GeocodeResultDTO(
        address="Epsom, Auckland 1023",
        location=LocationDTO(lat=-36.8735, lng=174.7762),
        confidence=85,
    ),
    GeocodeResultDTO(
        address="Ponsonby, Auckland 1011",
        location=LocationDTO(lat=-36.8467, lng=174.7457),
        confidence=80,
    ),
]


class MockGeocodingService:
    async def geocode_address(self, query: str) -> list[GeocodeResultDTO]:
        key = validate_query(query)
        return [result for result in MOCK_ADDRESSES if key in result.address.casefold()]

    async def reverse_geocode(self, *, lat: float, lng: float) -> str | None:
        return "Auckland, New Zealand"
