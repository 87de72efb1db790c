"""Categorical attributes of a school, stored as PostgreSQL enums."""

from __future__ import annotations

from enum import Enum


class SchoolType(str, Enum):
    primary = "Primary"
    intermediate = "Intermediate"
    secondary = "Secondary"
    composite = "Composite"


class Gender(str, Enum):
    coed = "Co-ed"
    boys = "Boys"
    girls = "Girls"


class Proprietor(str, Enum):
    state = "State"
    state_integrated = "State-Integrated"
    private = "Private"


# Enumeration order doubles as the sort order for sortBy=type.
SCHOOL_TYPE_ORDER: dict[SchoolType, int] = {t: i for i, t in enumerate(SchoolType)}


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Persist enum *values* ("Co-ed"), not member names."""
    return [member.value for member in enum_cls]
