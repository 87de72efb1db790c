"""DTOs for forward and reverse geocoding."""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.dto.school import LocationDTO


class GeocodeResultDTO(BaseModel):
    address: str = Field(description="Normalized address as returned by the provider")
    location: LocationDTO = Field(description="Resolved point")
    confidence: int = Field(ge=0, le=100, description="Provider confidence, 0-100")
