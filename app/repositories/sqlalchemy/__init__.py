"""SQLAlchemy implementations of repository interfaces."""

from .address_cache import SqlAlchemyAddressCacheRepository
from .school import SqlAlchemySchoolReadRepository
from .zone import SqlAlchemyZoneReadRepository

__all__ = [
    "SqlAlchemySchoolReadRepository",
    "SqlAlchemyZoneReadRepository",
    "SqlAlchemyAddressCacheRepository",
]
