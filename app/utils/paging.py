# app/utils/paging.py
from __future__ import annotations

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "DEFAULT_NEARBY_LIMIT",
    "MAX_NEARBY_LIMIT",
    "clamp_page",
    "clamp_page_size",
    "clamp_nearby_limit",
]

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
DEFAULT_NEARBY_LIMIT = 5
MAX_NEARBY_LIMIT = 20


def clamp_page(page: int | None) -> int:
    """Pages start at 1; anything lower (or missing) means the first page."""
    if page is None:
        return 1
    return max(1, int(page))


def clamp_page_size(page_size: int | None) -> int:
    """Default 20, capped at 100. A non-positive size falls back to the default.

    A request for 500 becomes 100 rather than an error.
    """
    if page_size is None or int(page_size) <= 0:
        return DEFAULT_PAGE_SIZE
    return min(int(page_size), MAX_PAGE_SIZE)


def clamp_nearby_limit(limit: int | None) -> int:
    """Default 5, capped at 20. Zero is allowed and yields no results."""
    if limit is None:
        return DEFAULT_NEARBY_LIMIT
    return max(0, min(int(limit), MAX_NEARBY_LIMIT))
