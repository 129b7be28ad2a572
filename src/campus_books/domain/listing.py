from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from campus_books.domain.errors import ValidationError


class FilterValidationError(ValidationError):
    """Raised when filter values reach the domain with the wrong type."""

    pass


class ConditionType(str, Enum):
    NEW = "New"
    LIKE_NEW = "Like New"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"


class ListingStatus(str, Enum):
    ACTIVE = "active"
    REMOVED = "removed"


MIN_PUBLISH_YEAR = 1900
MAX_PUBLISH_YEAR = 2026
PROGRAM_YEARS = (1, 2, 3, 4)
MAX_IMAGES = 3


@dataclass(frozen=True, slots=True)
class Seller:
    first_name: str
    last_name: str
    email: str


@dataclass(frozen=True)
class Listing:
    id: str
    seller_id: str
    book_title: str
    author: str
    publish_year: int
    program_name: str
    program_year: int
    price: Decimal
    condition_type: str
    created_at: datetime
    status: ListingStatus = ListingStatus.ACTIVE
    comments: str | None = None
    image_paths: tuple[str, ...] = ()
    seller: Seller | None = None

    @property
    def is_active(self) -> bool:
        return self.status == ListingStatus.ACTIVE


@dataclass(frozen=True, slots=True)
class NewListing:
    """Validated, typed fields of a listing that is about to be persisted."""

    book_title: str
    author: str
    publish_year: int
    program_name: str
    program_year: int
    price: Decimal
    condition_type: ConditionType
    comments: str | None = None


@dataclass(frozen=True, slots=True)
class ListingFilters:
    """
    Optional filter values of a listing query.

    None (or a blank string) means "no constraint"; it never means
    "match empty". The active-status clause is not part of the filters:
    repositories always apply it.
    """

    search: str | None = None
    program_name: str | None = None
    program_year: int | None = None
    condition_type: str | None = None
    price_min: Decimal | None = None
    price_max: Decimal | None = None

    def validate(self) -> None:
        """
        Validate filter value types.

        Raises:
            FilterValidationError: If a price bound is not a Decimal
        """
        # Guardrails: prevent float leakage past boundary
        if self.price_min is not None and not isinstance(self.price_min, Decimal):
            raise FilterValidationError(
                "price_min must be Decimal or None (no floats past the boundary)"
            )
        if self.price_max is not None and not isinstance(self.price_max, Decimal):
            raise FilterValidationError(
                "price_max must be Decimal or None (no floats past the boundary)"
            )


@dataclass(frozen=True, slots=True)
class ImageUpload:
    """An uploaded image as received from the caller, before storage."""

    filename: str
    content_type: str
    content: bytes = field(repr=False)


@dataclass(frozen=True, slots=True)
class ListingDraft:
    """
    Raw create-listing submission.

    Every field is the untrusted string the caller sent (or None);
    the listing validator turns a draft into a NewListing.
    """

    book_title: str | None = None
    author: str | None = None
    publish_year: str | None = None
    program_name: str | None = None
    program_year: str | None = None
    price: str | None = None
    condition_type: str | None = None
    comments: str | None = None
    images: tuple[ImageUpload, ...] = ()
