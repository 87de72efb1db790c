"""Geocode cache model."""

from __future__ import annotations

import uuid
from datetime import datetime

from geoalchemy2 import Geometry
from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.models.base import Base


class AddressCache(Base):
    """Cached geocoder answers keyed by the normalized query string.

    Rows are never updated while fresh and never deleted; expiry is applied
    when reading.
    """

    __tablename__ = "address_cache"
    __table_args__ = (
        UniqueConstraint(
            "query_string", "normalized_address", name="uq_address_cache_query_address"
        ),
    )

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    query_string: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    normalized_address: Mapped[str] = mapped_column(Text, nullable=False)
    location = mapped_column(Geometry("POINT", srid=4326), nullable=True)
    geocoder_provider: Mapped[str | None] = mapped_column(String(50), nullable=True)
    confidence: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
