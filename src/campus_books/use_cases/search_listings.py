from __future__ import annotations

from dataclasses import dataclass

from campus_books.domain.listing import Listing, ListingFilters
from campus_books.domain.pagination import PageRequest, PageWindow
from campus_books.ports.listing_repository import ListingRepository


@dataclass(frozen=True, slots=True)
class SearchListingsRequest:
    filters: ListingFilters
    page: PageRequest


@dataclass(frozen=True, slots=True)
class SearchListingsResponse:
    listings: list[Listing]
    total_count: int
    window: PageWindow


class SearchListings:
    """
    Browse active listings with search, filters and pagination.

    This use case validates the request and delegates predicate building,
    counting and paging to the repository adapter. No filtering logic
    exists in the use case.
    """

    def __init__(self, listing_repository: ListingRepository) -> None:
        self._listing_repository = listing_repository

    def execute(self, request: SearchListingsRequest) -> SearchListingsResponse:
        """
        Execute listing search.

        Validates request parameters before delegating to repository.
        This is the single source of validation (contract programming).

        Args:
            request: Search parameters (filters and page)

        Returns:
            Response containing the page of listings, total count and window

        Raises:
            PagingValidationError: If page_size is out of bounds
            FilterValidationError: If filter values have the wrong type
        """
        request.filters.validate()
        request.page.validate()

        result = self._listing_repository.search(
            filters=request.filters,
            page=request.page,
        )

        return SearchListingsResponse(
            listings=result.listings,
            total_count=result.total_count,
            window=result.window,
        )
