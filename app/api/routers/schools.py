"""/schools routers that delegate to services via DI."""

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import school_service, zone_service
from app.dto import LocationDTO, SchoolDTO, ZoneDTO
from app.schemas.common import ErrorResponse, parse_point
from app.schemas.responses import NearbyResponse
from app.services.interfaces import SchoolService, ZoneService
from app.services.schools import normalize_nearby_args

router = APIRouter(prefix="/schools", tags=["schools"])


# /nearby is registered before /{school_id} so it is not captured as an id.
@router.get(
    "/nearby",
    response_model=NearbyResponse,
    response_model_exclude_none=True,
    summary="Closest schools to a point",
    description="Great-circle distance, closest first. limit is capped at 20.",
    responses={
        400: {"model": ErrorResponse, "description": "missing or invalid lat/lng"},
        422: {"model": ErrorResponse, "description": "non-numeric parameter"},
    },
)
async def nearby_schools(
    lat: float | None = Query(None, description="Latitude"),
    lng: float | None = Query(None, description="Longitude"),
    radius: float | None = Query(None, description="Radius in metres (default 5000)"),
    limit: int | None = Query(None, description="Max results (default 5, cap 20)"),
    svc: SchoolService = Depends(school_service),
):
    lat_f, lng_f = parse_point(lat, lng)
    radius_m, capped = normalize_nearby_args(radius, limit)
    schools = await svc.find_nearby(lat=lat_f, lng=lng_f, radius_m=radius_m, limit=capped)
    return NearbyResponse(
        center=LocationDTO(lat=lat_f, lng=lng_f), radius=radius_m, schools=schools
    )


@router.get(
    "/{school_id}",
    response_model=SchoolDTO,
    response_model_exclude_none=True,
    summary="School by id",
    responses={404: {"model": ErrorResponse, "description": "Not Found"}},
)
async def get_school(school_id: str, svc: SchoolService = Depends(school_service)):
    school = await svc.get_by_id(school_id)
    if school is None:
        raise HTTPException(status_code=404, detail="school not found")
    return school


@router.get(
    "/{school_id}/zone",
    response_model=ZoneDTO,
    response_model_exclude_none=True,
    summary="Enrolment zone of a school",
    responses={404: {"model": ErrorResponse, "description": "Not Found"}},
)
async def get_school_zone(school_id: str, svc: ZoneService = Depends(zone_service)):
    zone = await svc.get_zone_by_school_id(school_id)
    if zone is None:
        raise HTTPException(status_code=404, detail="zone not found")
    return zone
