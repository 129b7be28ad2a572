"""Client-side query and result values."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from campus_books.domain.pagination import DEFAULT_PAGE_SIZE

FILTER_FIELDS = (
    "search",
    "program_name",
    "program_year",
    "condition_type",
    "price_min",
    "price_max",
)


@dataclass(frozen=True, slots=True)
class BrowseQuery:
    """What the browse screen is currently asking for, as typed by the user."""

    search: str = ""
    program_name: str = ""
    program_year: str = ""
    condition_type: str = ""
    price_min: str = ""
    price_max: str = ""
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def with_changes(self, **changes: str) -> BrowseQuery:
        """
        Apply search/filter edits.

        Any edit that actually changes a value starts over at page 1,
        since the old offset means nothing for the new result set.

        Raises:
            ValueError: If a key is not a search/filter field
        """
        unknown = set(changes) - set(FILTER_FIELDS)
        if unknown:
            raise ValueError(f"Not a filter field: {', '.join(sorted(unknown))}")

        updated = replace(self, **changes)
        if updated != self:
            updated = replace(updated, page=1)
        return updated

    def with_page(self, page: int) -> BrowseQuery:
        return replace(self, page=page)

    @property
    def has_criteria(self) -> bool:
        return any(getattr(self, name).strip() for name in FILTER_FIELDS)

    def to_params(self) -> dict[str, str]:
        """Query string for GET /api/listings; blank filters are omitted."""
        params = {
            name: getattr(self, name).strip()
            for name in FILTER_FIELDS
            if getattr(self, name).strip()
        }
        params["page"] = str(self.page)
        params["limit"] = str(self.page_size)
        return params


@dataclass(frozen=True)
class ListingsPage:
    listings: list[dict[str, Any]] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_pages: int = 1
    start_item: int = 0
    end_item: int = 0

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ListingsPage:
        return cls(
            listings=list(data.get("listings", [])),
            total=int(data.get("total", 0)),
            page=int(data.get("page", 1)),
            page_size=int(data.get("page_size", DEFAULT_PAGE_SIZE)),
            total_pages=int(data.get("total_pages", 1)),
            start_item=int(data.get("start_item", 0)),
            end_item=int(data.get("end_item", 0)),
        )
