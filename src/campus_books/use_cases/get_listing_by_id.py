"""Get listing by ID use case."""

from __future__ import annotations

from dataclasses import dataclass

from campus_books.domain.errors import NotFoundError
from campus_books.domain.listing import Listing
from campus_books.ports.listing_repository import ListingRepository


@dataclass(frozen=True, slots=True)
class GetListingByIdRequest:
    listing_id: str


@dataclass(frozen=True, slots=True)
class GetListingByIdResponse:
    listing: Listing


class GetListingById:
    """
    Use case for retrieving a single listing by ID.

    Responsibilities:
    - Delegate to repository for data access
    - Raise NotFoundError if the listing doesn't exist, including
      malformed ids (an id that cannot exist is simply unknown)
    """

    def __init__(self, listing_repository: ListingRepository) -> None:
        self._repository = listing_repository

    def execute(self, request: GetListingByIdRequest) -> GetListingByIdResponse:
        """
        Raises:
            NotFoundError: If no listing has the given id
        """
        listing = self._repository.get_by_id(request.listing_id)

        if listing is None:
            raise NotFoundError(resource="Listing", identifier=request.listing_id)

        return GetListingByIdResponse(listing=listing)
