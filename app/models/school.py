from __future__ import annotations

import uuid
from datetime import datetime

from geoalchemy2 import Geometry
from sqlalchemy import Boolean, DateTime, Enum, Integer, String, Text
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.models.base import Base
from app.models.enums import Gender, Proprietor, SchoolType, enum_values


class School(Base):
    __tablename__ = "schools"

    id: Mapped[str] = mapped_column(
        UUID(as_uuid=False), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    aka_names: Mapped[list[str] | None] = mapped_column(ARRAY(Text), nullable=True)
    type: Mapped[SchoolType] = mapped_column(
        Enum(SchoolType, name="school_type", values_callable=enum_values), nullable=False
    )
    year_levels: Mapped[str | None] = mapped_column(String(50), nullable=True)
    min_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    gender: Mapped[Gender] = mapped_column(
        Enum(Gender, name="gender", values_callable=enum_values), nullable=False
    )
    proprietor: Mapped[Proprietor] = mapped_column(
        Enum(Proprietor, name="proprietor", values_callable=enum_values), nullable=False
    )
    special_character: Mapped[str | None] = mapped_column(String(100), nullable=True)
    boarding: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    website_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    roll: Mapped[int | None] = mapped_column(Integer, nullable=True)
    equity_index_band: Mapped[int | None] = mapped_column(Integer, nullable=True)
    decile: Mapped[int | None] = mapped_column(Integer, nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    suburb: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # WGS84 point, stored (lng, lat)
    location = mapped_column(Geometry("POINT", srid=4326, spatial_index=True), nullable=True)
    source_provider: Mapped[str | None] = mapped_column(String(100), nullable=True)
    source_file_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    imported_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
