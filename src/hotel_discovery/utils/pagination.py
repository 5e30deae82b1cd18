"""Page slicing for result sets."""

import math
from collections.abc import Sequence
from typing import TypeVar

from hotel_discovery.entities import Page, PageMeta

T = TypeVar("T")


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    """Slice one page out of a full result set.

    ``page`` is 1-indexed and clamped to at least 1; ``limit`` is clamped to
    at least 1. Out-of-range pages yield an empty slice with correct meta.
    ``meta.total`` always counts the full, pre-slice set.
    """
    page = max(1, int(page))
    limit = max(1, int(limit))
    total = len(items)
    total_pages = math.ceil(total / limit)

    start = (page - 1) * limit
    sliced = tuple(items[start : start + limit])

    return Page(
        items=sliced,
        meta=PageMeta(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        ),
    )
