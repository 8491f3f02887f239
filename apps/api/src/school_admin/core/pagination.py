"""Page/limit query parameters and pagination math."""

import math
from dataclasses import dataclass

from fastapi import Query

from school_admin.core.schemas import Pagination

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PageParams:
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def to_pagination(self, total_count: int) -> Pagination:
        return Pagination(
            current_page=self.page,
            total_pages=math.ceil(total_count / self.limit) if total_count else 0,
            total_count=total_count,
            page_size=self.limit,
        )


def page_params(
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
) -> PageParams:
    """FastAPI dependency reading ``page`` and ``limit`` from the query string."""
    return PageParams(page=page, limit=limit)
