"""/geocode routers."""

from fastapi import APIRouter, Depends, Query

from app.api.deps import geocoding_service
from app.core.exceptions import ValidationError
from app.dto import LocationDTO
from app.schemas.common import ErrorResponse, parse_point
from app.schemas.responses import GeocodeResponse, ReverseGeocodeResponse
from app.services.interfaces import GeocodingService

router = APIRouter(prefix="/geocode", tags=["geocode"])


@router.get(
    "",
    response_model=GeocodeResponse,
    summary="Forward geocode an Auckland address",
    description="Served from the address cache while fresh (7 days by default).",
    responses={
        400: {"model": ErrorResponse, "description": "query missing or shorter than 3"},
        503: {"model": ErrorResponse, "description": "cache unavailable"},
    },
)
async def geocode(
    query: str | None = Query(None, description="Free-text address, at least 3 characters"),
    svc: GeocodingService = Depends(geocoding_service),
):
    if query is None or not query.strip():
        raise ValidationError("query parameter is required")
    results = await svc.geocode_address(query)
    return GeocodeResponse(query=query, results=results)


@router.get(
    "/reverse",
    response_model=ReverseGeocodeResponse,
    summary="Reverse geocode a point",
    responses={400: {"model": ErrorResponse, "description": "missing or invalid lat/lng"}},
)
async def reverse_geocode(
    lat: float | None = Query(None, description="Latitude"),
    lng: float | None = Query(None, description="Longitude"),
    svc: GeocodingService = Depends(geocoding_service),
):
    lat_f, lng_f = parse_point(lat, lng)
    address = await svc.reverse_geocode(lat=lat_f, lng=lng_f)
    return ReverseGeocodeResponse(location=LocationDTO(lat=lat_f, lng=lng_f), address=address)
