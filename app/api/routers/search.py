"""/search router."""

from fastapi import APIRouter, Depends

from app.api.deps import school_service
from app.dto import SearchCriteria, SearchPageDTO
from app.schemas.common import ErrorResponse
from app.schemas.search import search_criteria_query
from app.services.interfaces import SchoolService

router = APIRouter(prefix="/search", tags=["schools"])


_DESC = (
    "Filter schools by text, category, location and zone status.\n"
    "- q matches name, address or suburb (case-insensitive substring)\n"
    "- repeated or comma-separated values for type / gender / proprietor / "
    "equityIndexBand / decile\n"
    "- lat+lng (+radius, default 5000 m) restricts to a circle and adds distanceMeters\n"
    "- bbox=minLng,minLat,maxLng,maxLat restricts to an envelope (edges inclusive)\n"
    "- sortBy=name | type | distance (distance needs lat/lng, otherwise name)\n"
    "- pageSize is capped at 100\n"
)


@router.get(
    "",
    response_model=SearchPageDTO,
    response_model_exclude_none=True,
    summary="Search schools",
    description=_DESC,
    responses={
        400: {"model": ErrorResponse, "description": "invalid filter"},
        422: {"model": ErrorResponse, "description": "non-numeric parameter"},
        503: {"model": ErrorResponse, "description": "backend unavailable"},
    },
)
async def search_schools(
    criteria: SearchCriteria = Depends(search_criteria_query),
    svc: SchoolService = Depends(school_service),
):
    return await svc.search(criteria)
