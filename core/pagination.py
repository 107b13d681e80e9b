"""
core/pagination.py -- Page metadata for offset-paginated list endpoints.

Pure functions only: no I/O, no request objects. List handlers compute the
offset from (page, limit), fetch `limit` rows plus the filtered total in one
transaction, then call paginate() to describe the page they are returning.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


# Largest accepted page number and page size. Together they keep the row
# offset inside a signed 64-bit integer.
MAX_PAGE = 2**31 - 1
MAX_LIMIT = 1000


@dataclass(frozen=True)
class Pagination:
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool


def start_index(page: int, limit: int) -> int:
    """Return the zero-based row offset of the first item on `page`."""
    return (page - 1) * limit


def paginate(start: int, page: int, limit: int, total: int) -> Pagination:
    """Describe one page of a result set of `total` rows.

    >>> paginate(0, 1, 10, 25)
    Pagination(page=1, limit=10, total_pages=3, has_next=True, has_prev=False)
    """
    return Pagination(
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
        has_next=start + limit < total,
        has_prev=page > 1,
    )
