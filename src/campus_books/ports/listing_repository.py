from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from campus_books.domain.listing import Listing, ListingFilters, NewListing
from campus_books.domain.pagination import PageRequest, PageWindow


@dataclass(frozen=True)
class SearchResult:
    """Result from a listing search including pagination metadata."""

    listings: list[Listing]
    total_count: int  # Total matching active listings before paging
    window: PageWindow


class ListingRepository(ABC):
    """
    Port for listing data access.

    Contract (Preconditions):
        - filters and page requests are validated by the caller (UseCase)
        - Implementations trust inputs are valid and do not re-validate

    Contract (Postconditions):
        - search only ever returns active listings, newest first
        - total_count counts every match, independent of paging
        - the requested page is clamped with PageWindow before rows are fetched
    """

    @abstractmethod
    def search(self, filters: ListingFilters, page: PageRequest) -> SearchResult:
        """
        Search active listings with filters and paging.

        Args:
            filters: Filter criteria (AND semantics) - pre-validated
            page: Requested page - pre-validated

        Returns:
            SearchResult with the page of listings, total count and window
        """
        ...

    @abstractmethod
    def get_by_id(self, listing_id: str) -> Listing | None:
        """Return the listing (any status) or None if it does not exist."""
        ...

    @abstractmethod
    def create(self, seller_id: str, listing: NewListing, image_paths: list[str]) -> str:
        """
        Persist a new active listing.

        Args:
            seller_id: Authenticated user creating the listing
            listing: Validated listing fields
            image_paths: Paths of already-stored images, in display order

        Returns:
            The new listing id
        """
        ...

    @abstractmethod
    def list_distinct_programs(self) -> list[str]:
        """Program names used by active listings, ascending."""
        ...
