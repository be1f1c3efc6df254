"""
Limit/offset paging for list endpoints.

Usage:
    def list_rows(pagination: Pagination = Depends(get_pagination)):
        ...
"""

from dataclasses import dataclass

from fastapi import Query

from shared.config.constants import Limits


@dataclass
class Pagination:
    """Page window, clamped to 1..max_limit rows starting at offset >= 0."""

    limit: int
    offset: int
    max_limit: int = Limits.MAX_PAGE_SIZE

    def __post_init__(self):
        self.limit = min(max(1, self.limit), self.max_limit)
        self.offset = max(0, self.offset)


def get_pagination(
    limit: int = Query(
        default=Limits.DEFAULT_PAGE_SIZE,
        ge=1,
        le=Limits.MAX_PAGE_SIZE,
        description="Maximum number of rows to return",
    ),
    offset: int = Query(default=0, ge=0, description="Number of rows to skip"),
) -> Pagination:
    return Pagination(limit=limit, offset=offset)
