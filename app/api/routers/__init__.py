"""Router modules exposed for convenient imports."""

from . import geocode, healthz, readyz, schools, search, zones

__all__ = [
    "geocode",
    "healthz",
    "readyz",
    "schools",
    "search",
    "zones",
]
