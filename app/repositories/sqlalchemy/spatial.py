"""PostGIS expression builders.

All builders take (lat, lng) in API order and emit (lng, lat) to PostGIS.
"""

from __future__ import annotations

from geoalchemy2 import Geography
from sqlalchemy import cast, func, literal
from sqlalchemy.sql.elements import ColumnElement

from app.utils.geo import EARTH_RADIUS_M, BBox

SRID = 4326

# ST_DWithin on geography is spheroidal; widen it so it never drops a row the
# spherical haversine predicate would keep.
_PREFILTER_SLACK = 1.01


def make_point(lat: float, lng: float) -> ColumnElement:
    return func.ST_SetSRID(func.ST_MakePoint(float(lng), float(lat)), SRID)


def make_envelope(bbox: BBox) -> ColumnElement:
    return func.ST_MakeEnvelope(bbox.min_lng, bbox.min_lat, bbox.max_lng, bbox.max_lat, SRID)


def haversine_distance_m(lat_col, lng_col, lat: float, lng: float) -> ColumnElement:
    """Great-circle distance in metres, same formula as ``app.utils.geo``."""

    lat_rad = func.radians(lat_col)
    lng_rad = func.radians(lng_col)
    lat0_rad = func.radians(literal(float(lat)))
    lng0_rad = func.radians(literal(float(lng)))

    dlat = lat_rad - lat0_rad
    dlng = lng_rad - lng0_rad

    a = func.pow(func.sin(dlat / 2.0), 2) + func.cos(lat0_rad) * func.cos(lat_rad) * func.pow(
        func.sin(dlng / 2.0), 2
    )
    return EARTH_RADIUS_M * 2.0 * func.asin(func.sqrt(func.least(1.0, a)))


def point_distance_m(point_col, lat: float, lng: float) -> ColumnElement:
    return haversine_distance_m(func.ST_Y(point_col), func.ST_X(point_col), lat, lng)


def within_radius_prefilter(point_col, lat: float, lng: float, radius_m: float) -> ColumnElement:
    """Index-assisted superset of the exact haversine radius test."""

    return func.ST_DWithin(
        cast(point_col, Geography(srid=SRID)),
        cast(make_point(lat, lng), Geography(srid=SRID)),
        float(radius_m) * _PREFILTER_SLACK + 1.0,
    )


def escape_like(term: str) -> str:
    """Make ``term`` a literal substring for ILIKE (escape char: backslash)."""

    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
