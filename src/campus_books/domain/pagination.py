from __future__ import annotations

import math
from dataclasses import dataclass

from campus_books.domain.errors import ValidationError

DEFAULT_PAGE_SIZE = 25
MAX_PAGE_SIZE = 100


class PagingValidationError(ValidationError):
    """Raised when paging parameters are invalid."""

    pass


@dataclass(frozen=True, slots=True)
class PageRequest:
    """
    Requested page of a listing query.

    ``page`` may be any integer: out-of-range pages are clamped by
    PageWindow once the total is known, they are never rejected.
    """

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def validate(self) -> None:
        """
        Validate paging parameters.

        Raises:
            PagingValidationError: If page_size is outside 1..MAX_PAGE_SIZE
        """
        if self.page_size <= 0:
            raise PagingValidationError("page_size must be > 0")
        if self.page_size > MAX_PAGE_SIZE:
            raise PagingValidationError(f"page_size must be <= {MAX_PAGE_SIZE}")


@dataclass(frozen=True, slots=True)
class PageWindow:
    """The slice of a result set shown for one page, plus display metadata."""

    page: int
    page_size: int
    total_count: int
    total_pages: int
    offset: int
    limit: int
    start_item: int
    end_item: int

    @classmethod
    def compute(cls, requested_page: int, page_size: int, total_count: int) -> PageWindow:
        """
        Clamp the requested page against the total and derive offset/limit.

        Example (page_size=25, total_count=60):
            page 0  -> page 1, offset 0,  items 1-25
            page 3  -> page 3, offset 50, items 51-60
            page 9  -> page 3 (last page)

        Args:
            requested_page: Page number asked for (any integer)
            page_size: Rows per page (> 0)
            total_count: Rows matching the query, ignoring paging

        Returns:
            PageWindow for the clamped page
        """
        total_pages = max(1, math.ceil(total_count / page_size))
        page = max(1, min(requested_page, total_pages))
        offset = (page - 1) * page_size

        return cls(
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            offset=offset,
            limit=page_size,
            start_item=0 if total_count == 0 else offset + 1,
            end_item=min(page * page_size, total_count),
        )

    @property
    def is_paginated(self) -> bool:
        """Whether pagination controls should be shown at all."""
        return self.total_pages > 1

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages
