"""Great-circle distance and bounding-box helpers shared by both backends."""

from __future__ import annotations

import math
from typing import NamedTuple

from app.core.exceptions import ValidationError

EARTH_RADIUS_M = 6_371_000.0
DEFAULT_RADIUS_M = 5000.0

LatLng = tuple[float, float]


class BBox(NamedTuple):
    """Axis-aligned envelope in (minLng, minLat, maxLng, maxLat) order."""

    min_lng: float
    min_lat: float
    max_lng: float
    max_lat: float

    def contains(self, lat: float, lng: float) -> bool:
        # Inclusive on every edge.
        return self.min_lat <= lat <= self.max_lat and self.min_lng <= lng <= self.max_lng


def haversine_distance_m(
    point_a: LatLng, point_b: LatLng, *, radius_m: float = EARTH_RADIUS_M
) -> float:
    """Compute the great-circle distance between two (lat, lng) points in metres.

    Mirrors the SQL expression in ``app.repositories.sqlalchemy.spatial`` so both
    backends rank and filter identically. The intermediate value is clamped to
    [0, 1] against floating point drift near antipodes.
    """

    lat1, lng1 = point_a
    lat2, lng2 = point_b

    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2.0) ** 2
    a = min(1.0, max(0.0, a))
    return radius_m * 2.0 * math.asin(math.sqrt(a))


def parse_bbox(raw: str) -> BBox:
    """Parse ``"minLng,minLat,maxLng,maxLat"``."""

    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 4:
        raise ValidationError("bbox must be four comma-separated numbers: minLng,minLat,maxLng,maxLat")
    try:
        min_lng, min_lat, max_lng, max_lat = (float(p) for p in parts)
    except ValueError:
        raise ValidationError("bbox must contain only numbers") from None
    if not all(math.isfinite(v) for v in (min_lng, min_lat, max_lng, max_lat)):
        raise ValidationError("bbox must contain only finite numbers")
    if min_lng > max_lng or min_lat > max_lat:
        raise ValidationError("bbox minimums must not exceed maximums")
    return BBox(min_lng, min_lat, max_lng, max_lat)


__all__ = ["EARTH_RADIUS_M", "DEFAULT_RADIUS_M", "BBox", "LatLng", "haversine_distance_m", "parse_bbox"]
