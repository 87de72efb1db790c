"""Create schools, zones and address_cache with PostGIS geometry.

Revision ID: 5d1c0a7e9b42
Revises:
Create Date: 2025-01-20 00:00:00.000000

"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from geoalchemy2 import Geometry
from sqlalchemy.dialects import postgresql

# Alembic identifiers
revision: str = "5d1c0a7e9b42"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

school_type = postgresql.ENUM(
    "Primary", "Intermediate", "Secondary", "Composite", name="school_type", create_type=False
)
gender = postgresql.ENUM("Co-ed", "Boys", "Girls", name="gender", create_type=False)
proprietor = postgresql.ENUM(
    "State", "State-Integrated", "Private", name="proprietor", create_type=False
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "imported_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.func.now()
        ),
    ]


def upgrade() -> None:
    op.execute("CREATE EXTENSION IF NOT EXISTS postgis")

    bind = op.get_bind()
    school_type.create(bind, checkfirst=True)
    gender.create(bind, checkfirst=True)
    proprietor.create(bind, checkfirst=True)

    op.create_table(
        "schools",
        sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("aka_names", postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column("type", school_type, nullable=False),
        sa.Column("year_levels", sa.String(length=50), nullable=True),
        sa.Column("min_year", sa.Integer(), nullable=True),
        sa.Column("max_year", sa.Integer(), nullable=True),
        sa.Column("gender", gender, nullable=False),
        sa.Column("proprietor", proprietor, nullable=False),
        sa.Column("special_character", sa.String(length=100), nullable=True),
        sa.Column("boarding", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("website_url", sa.String(length=500), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("roll", sa.Integer(), nullable=True),
        sa.Column("equity_index_band", sa.Integer(), nullable=True),
        sa.Column("decile", sa.Integer(), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.Column("suburb", sa.String(length=100), nullable=True),
        sa.Column(
            "location",
            Geometry(geometry_type="POINT", srid=4326, spatial_index=False),
            nullable=True,
        ),
        sa.Column("source_provider", sa.String(length=100), nullable=True),
        sa.Column("source_file_id", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "equity_index_band BETWEEN 1 AND 4", name="ck_schools_equity_index_band"
        ),
        sa.CheckConstraint("decile BETWEEN 1 AND 10", name="ck_schools_decile"),
    )
    op.create_index("ix_schools_name", "schools", ["name"])
    op.create_index(
        "idx_schools_location", "schools", ["location"], postgresql_using="gist"
    )

    op.create_table(
        "zones",
        sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column(
            "school_id",
            postgresql.UUID(as_uuid=False),
            sa.ForeignKey("schools.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "geometry",
            Geometry(geometry_type="MULTIPOLYGON", srid=4326, spatial_index=False),
            nullable=False,
        ),
        sa.Column("last_updated", sa.DateTime(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("source_provider", sa.String(length=100), nullable=True),
        sa.Column("source_file_id", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("school_id", name="uq_zones_school_id"),
        sa.CheckConstraint("ST_IsValid(geometry)", name="ck_zones_geometry_valid"),
    )
    op.create_index("idx_zones_geometry", "zones", ["geometry"], postgresql_using="gist")

    op.create_table(
        "address_cache",
        sa.Column("id", postgresql.UUID(as_uuid=False), primary_key=True),
        sa.Column("query_string", sa.String(length=500), nullable=False),
        sa.Column("normalized_address", sa.Text(), nullable=False),
        sa.Column(
            "location",
            Geometry(geometry_type="POINT", srid=4326, spatial_index=False),
            nullable=True,
        ),
        sa.Column("geocoder_provider", sa.String(length=50), nullable=True),
        sa.Column("confidence", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.UniqueConstraint(
            "query_string", "normalized_address", name="uq_address_cache_query_address"
        ),
    )
    op.create_index("ix_address_cache_query_string", "address_cache", ["query_string"])
    op.create_index(
        "idx_address_cache_location", "address_cache", ["location"], postgresql_using="gist"
    )


def downgrade() -> None:
    op.drop_index("idx_address_cache_location", table_name="address_cache")
    op.drop_index("ix_address_cache_query_string", table_name="address_cache")
    op.drop_table("address_cache")
    op.drop_index("idx_zones_geometry", table_name="zones")
    op.drop_table("zones")
    op.drop_index("idx_schools_location", table_name="schools")
    op.drop_index("ix_schools_name", table_name="schools")
    op.drop_table("schools")

    bind = op.get_bind()
    proprietor.drop(bind, checkfirst=True)
    gender.drop(bind, checkfirst=True)
    school_type.drop(bind, checkfirst=True)
