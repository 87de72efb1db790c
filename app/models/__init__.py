# Import every model so Alembic autogenerate sees the full metadata.
# app/models/__init__.py
from .address_cache import AddressCache
from .base import Base
from .enums import Gender, Proprietor, SchoolType
from .school import School
from .zone import Zone

__all__ = [
    "Base",
    "AddressCache",
    "School",
    "Zone",
    "SchoolType",
    "Gender",
    "Proprietor",
]
