from .common import ErrorResponse, OkResponse
from .responses import (
    GeocodeResponse,
    NearbyResponse,
    ReverseGeocodeResponse,
    ZonesInBoundsResponse,
)
from .search import search_criteria_query

__all__ = [
    "ErrorResponse",
    "OkResponse",
    "NearbyResponse",
    "ZonesInBoundsResponse",
    "GeocodeResponse",
    "ReverseGeocodeResponse",
    "search_criteria_query",
]
