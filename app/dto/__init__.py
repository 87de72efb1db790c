"""Public DTO exports for FastAPI response models."""

from .geocode import GeocodeResultDTO
from .school import LocationDTO, SchoolDTO
from .search import SearchCriteria, SearchPageDTO
from .zone import ZoneCheckDTO, ZoneDTO, ZoneMatchDTO

__all__ = [
    "GeocodeResultDTO",
    "LocationDTO",
    "SchoolDTO",
    "SearchCriteria",
    "SearchPageDTO",
    "ZoneCheckDTO",
    "ZoneDTO",
    "ZoneMatchDTO",
]
