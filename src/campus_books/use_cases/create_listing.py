"""Create listing use case."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from campus_books.domain.listing import ListingDraft
from campus_books.domain.listing_validation import validate_listing_draft
from campus_books.domain.user import AuthenticatedUser
from campus_books.ports.image_storage import ImageStorage
from campus_books.ports.listing_repository import ListingRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CreateListingRequest:
    seller: AuthenticatedUser
    draft: ListingDraft


@dataclass(frozen=True, slots=True)
class CreateListingResponse:
    listing_id: str
    image_paths: list[str]


class CreateListing:
    """
    Use case for publishing a new listing.

    Order of operations:
    1. Validate every field and image (nothing is written on failure)
    2. Write the images to storage
    3. Insert the listing row referencing the stored paths

    The seller is always the authenticated caller, never a submitted field.
    If the insert fails, the images written in step 2 are removed again.
    """

    def __init__(
        self,
        listing_repository: ListingRepository,
        image_storage: ImageStorage,
    ) -> None:
        self._repository = listing_repository
        self._image_storage = image_storage

    def execute(self, request: CreateListingRequest) -> CreateListingResponse:
        """
        Raises:
            ValidationError: If any field or image is invalid
            PersistenceError: If the listing could not be stored
        """
        validated = validate_listing_draft(request.draft)

        image_paths: list[str] = []
        try:
            for image in validated.images:
                image_paths.append(self._image_storage.save(image))

            listing_id = self._repository.create(
                seller_id=request.seller.user_id,
                listing=validated.listing,
                image_paths=image_paths,
            )
        except Exception:
            for path in image_paths:
                self._image_storage.delete(path)
            raise

        logger.info(
            "Listing created",
            extra={
                "listing_id": listing_id,
                "seller_id": request.seller.user_id,
                "images": len(image_paths),
            },
        )
        return CreateListingResponse(listing_id=listing_id, image_paths=image_paths)
