"""Pagination for video listings.

Listings are ordered by created_at descending (newest first), with the
record id as a tie breaker so windows are deterministic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from video_catalog.catalog.filters import SQL_INT_MAX, parse_int

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class PageWindow:
    """A resolved page request."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        # clamped to the store's integer range
        return min((self.page - 1) * self.limit, SQL_INT_MAX)


def resolve_window(
    page: object = None, limit: object = None, max_limit: int | None = None
) -> PageWindow:
    """Resolve raw page/limit parameters into a PageWindow.

    Values that are missing, not positive integers, or too large for the
    store fall back to the defaults. When max_limit is given, limit is
    clamped to it.

    Args:
        page: Raw page parameter.
        limit: Raw limit parameter.
        max_limit: Optional upper bound for limit.

    Returns:
        PageWindow with page >= 1 and limit >= 1.
    """
    parsed_page = parse_int(page)
    parsed_limit = parse_int(limit)

    if parsed_page is None or parsed_page < 1:
        parsed_page = DEFAULT_PAGE
    if parsed_limit is None or parsed_limit < 1:
        parsed_limit = DEFAULT_LIMIT
    if max_limit is not None:
        parsed_limit = min(parsed_limit, max_limit)

    return PageWindow(page=parsed_page, limit=parsed_limit)


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for total records (0 when total is 0)."""
    return math.ceil(total / limit) if total > 0 else 0
