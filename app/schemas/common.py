# app/schemas/common.py
from __future__ import annotations

import math

from pydantic import BaseModel, Field

from app.core.exceptions import ValidationError

_TRUE = frozenset({"true", "1", "yes"})
_FALSE = frozenset({"false", "0", "no"})


class ErrorResponse(BaseModel):
    detail: str = Field(description="Error message")

    model_config = {"json_schema_extra": {"examples": [{"detail": "Not Found"}]}}


class OkResponse(BaseModel):
    ok: bool = Field(description="Always true")

    model_config = {"json_schema_extra": {"examples": [{"ok": True}]}}


def parse_point(lat: float | None, lng: float | None) -> tuple[float, float]:
    """Require both coordinates and check their ranges."""

    if lat is None or lng is None:
        raise ValidationError("lat and lng are required")
    return check_point(lat, lng)


def check_point(lat: float, lng: float) -> tuple[float, float]:
    if not (math.isfinite(lat) and -90.0 <= lat <= 90.0):
        raise ValidationError("lat must be between -90 and 90")
    if not (math.isfinite(lng) and -180.0 <= lng <= 180.0):
        raise ValidationError("lng must be between -180 and 180")
    return float(lat), float(lng)


def parse_bool(name: str, raw: str | None) -> bool | None:
    if raw is None or not raw.strip():
        return None
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValidationError(f"{name} must be true or false")
