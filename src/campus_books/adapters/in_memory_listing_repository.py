from __future__ import annotations

import uuid
from datetime import datetime, timezone

from campus_books.domain.listing import (
    Listing,
    ListingFilters,
    ListingStatus,
    NewListing,
    Seller,
)
from campus_books.domain.pagination import PageRequest, PageWindow
from campus_books.domain.search import SEARCHABLE_FIELDS, matches_term
from campus_books.ports.listing_repository import ListingRepository, SearchResult


class InMemoryListingRepository(ListingRepository):
    """
    Canonical contract implementation for tests.

    - Only active listings are searchable
    - Applies AND-semantics filtering and the shared substring search rule
    - Orders newest first (created_at DESC, id DESC)
    - Clamps the page and applies paging AFTER filtering
    - Returns total_count of matching listings before paging
    """

    def __init__(
        self,
        listings: list[Listing] | None = None,
        sellers: dict[str, Seller] | None = None,
    ) -> None:
        self._listings = list(listings or [])
        self._sellers = dict(sellers or {})

    def search(self, filters: ListingFilters, page: PageRequest) -> SearchResult:
        # Trust that UseCase has validated inputs (contract programming)
        matches = [
            listing
            for listing in self._listings
            if listing.is_active and self._matches(listing, filters)
        ]
        matches.sort(key=lambda listing: (listing.created_at, listing.id), reverse=True)
        total_count = len(matches)  # Count BEFORE paging

        window = PageWindow.compute(page.page, page.page_size, total_count)
        paginated = matches[window.offset : window.offset + window.limit]

        return SearchResult(listings=paginated, total_count=total_count, window=window)

    def get_by_id(self, listing_id: str) -> Listing | None:
        return next((listing for listing in self._listings if listing.id == listing_id), None)

    def create(self, seller_id: str, listing: NewListing, image_paths: list[str]) -> str:
        listing_id = str(uuid.uuid4())
        self._listings.append(
            Listing(
                id=listing_id,
                seller_id=seller_id,
                book_title=listing.book_title,
                author=listing.author,
                publish_year=listing.publish_year,
                program_name=listing.program_name,
                program_year=listing.program_year,
                price=listing.price,
                condition_type=listing.condition_type.value,
                comments=listing.comments,
                image_paths=tuple(image_paths),
                status=ListingStatus.ACTIVE,
                created_at=datetime.now(timezone.utc),
                seller=self._sellers.get(seller_id),
            )
        )
        return listing_id

    def list_distinct_programs(self) -> list[str]:
        return sorted({listing.program_name for listing in self._listings if listing.is_active})

    def _matches(self, listing: Listing, filters: ListingFilters) -> bool:
        searchable = [getattr(listing, name) for name in SEARCHABLE_FIELDS]
        if not matches_term(searchable, filters.search):
            return False
        if filters.program_name and filters.program_name.strip():
            if listing.program_name != filters.program_name.strip():
                return False
        if filters.program_year is not None and listing.program_year != filters.program_year:
            return False
        if filters.condition_type and filters.condition_type.strip():
            if listing.condition_type != filters.condition_type.strip():
                return False
        if filters.price_min is not None and listing.price < filters.price_min:
            return False
        if filters.price_max is not None and listing.price > filters.price_max:
            return False
        return True
