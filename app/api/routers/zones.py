"""/zones routers."""

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import zone_service
from app.core.exceptions import ValidationError
from app.dto import ZoneCheckDTO, ZoneDTO
from app.schemas.common import ErrorResponse, parse_point
from app.schemas.responses import ZonesInBoundsResponse
from app.services.interfaces import ZoneService
from app.utils.geo import parse_bbox

router = APIRouter(prefix="/zones", tags=["zones"])


@router.get(
    "",
    response_model=ZonesInBoundsResponse,
    response_model_exclude_none=True,
    summary="Zones intersecting a bounding box",
    responses={400: {"model": ErrorResponse, "description": "missing or malformed bbox"}},
)
async def zones_in_bounds(
    bbox: str | None = Query(None, description="minLng,minLat,maxLng,maxLat"),
    svc: ZoneService = Depends(zone_service),
):
    if not bbox:
        raise ValidationError("bbox is required")
    zones = await svc.get_zones_in_bounds(parse_bbox(bbox))
    return ZonesInBoundsResponse(zones=zones)


@router.get(
    "/contains",
    response_model=ZoneCheckDTO,
    response_model_exclude_none=True,
    summary="Zones containing a point",
    description="A point on a zone boundary counts as inside.",
    responses={
        400: {"model": ErrorResponse, "description": "missing or invalid lat/lng"},
        422: {"model": ErrorResponse, "description": "non-numeric parameter"},
    },
)
async def zones_containing(
    lat: float | None = Query(None, description="Latitude"),
    lng: float | None = Query(None, description="Longitude"),
    svc: ZoneService = Depends(zone_service),
):
    lat_f, lng_f = parse_point(lat, lng)
    return await svc.check_address_in_zones(lat=lat_f, lng=lng_f)


@router.get(
    "/{zone_id}",
    response_model=ZoneDTO,
    response_model_exclude_none=True,
    summary="Zone by id",
    responses={404: {"model": ErrorResponse, "description": "Not Found"}},
)
async def get_zone(zone_id: str, svc: ZoneService = Depends(zone_service)):
    zone = await svc.get_zone_by_id(zone_id)
    if zone is None:
        raise HTTPException(status_code=404, detail="zone not found")
    return zone
