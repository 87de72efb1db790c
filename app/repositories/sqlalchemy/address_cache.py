"""SQLAlchemy implementation of the geocode cache repository."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from app.dto import GeocodeResultDTO
from app.models import AddressCache
from app.repositories.interfaces import AddressCacheRepository, CachedAddressRow
from app.repositories.sqlalchemy.spatial import make_point
from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession


class SqlAlchemyAddressCacheRepository(AddressCacheRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def fetch_fresh(self, query_string: str, *, cutoff: datetime) -> list[CachedAddressRow]:
        stmt = (
            select(
                AddressCache.normalized_address,
                func.ST_Y(AddressCache.location).label("lat"),
                func.ST_X(AddressCache.location).label("lng"),
                AddressCache.confidence,
                AddressCache.geocoder_provider,
                AddressCache.created_at,
            )
            .where(
                AddressCache.query_string == query_string,
                AddressCache.created_at > cutoff,
            )
            .order_by(AddressCache.confidence.desc().nulls_last(), AddressCache.id.asc())
        )
        rows = await self._session.execute(stmt)
        return [
            CachedAddressRow(
                normalized_address=row.normalized_address,
                lat=row.lat,
                lng=row.lng,
                confidence=row.confidence,
                provider=row.geocoder_provider,
                created_at=row.created_at,
            )
            for row in rows.all()
        ]

    async def insert_results(
        self,
        query_string: str,
        results: Sequence[GeocodeResultDTO],
        *,
        provider: str,
        now: datetime,
        cutoff: datetime,
    ) -> None:
        """Store results; a fresh row for the same address is left untouched.

        Expired rows with the same (query, address) key are replaced in place.
        """

        for result in results:
            stmt = pg_insert(AddressCache).values(
                query_string=query_string,
                normalized_address=result.address,
                location=make_point(result.location.lat, result.location.lng),
                geocoder_provider=provider,
                confidence=result.confidence,
                created_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                constraint="uq_address_cache_query_address",
                set_={
                    "location": stmt.excluded.location,
                    "geocoder_provider": stmt.excluded.geocoder_provider,
                    "confidence": stmt.excluded.confidence,
                    "created_at": stmt.excluded.created_at,
                },
                where=AddressCache.created_at <= cutoff,
            )
            await self._session.execute(stmt)
