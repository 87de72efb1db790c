# app/utils/sort.py
from __future__ import annotations

from typing import Literal

__all__ = ["SortKey", "resolve_sort_key"]

SortKey = Literal["name", "type", "distance"]


def resolve_sort_key(s: str | None, *, has_center: bool) -> SortKey:
    """Normalize the user-supplied ``sortBy`` value.

    - missing / empty / unknown -> ``name``
    - ``distance`` only applies when a center point was given; otherwise ``name``
    """
    if not s:
        return "name"
    k = s.lower().strip()
    if k == "type":
        return "type"
    if k == "distance":
        return "distance" if has_center else "name"
    return "name"
