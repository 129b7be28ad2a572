"""Listing creation rules.

Turns an untrusted ListingDraft into a typed NewListing, or raises a
ValidationError naming every field that failed. Runs on the server before
anything is written, and on the client before a submission is sent.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from campus_books.domain.errors import ValidationError
from campus_books.domain.listing import (
    MAX_IMAGES,
    MAX_PUBLISH_YEAR,
    MIN_PUBLISH_YEAR,
    PROGRAM_YEARS,
    ConditionType,
    ImageUpload,
    ListingDraft,
    NewListing,
)

ACCEPTED_IMAGE_TYPES = frozenset({"image/png", "image/jpeg", "image/jpg"})

MAX_TITLE_LENGTH = 255
MAX_AUTHOR_LENGTH = 255
MAX_PROGRAM_NAME_LENGTH = 100
MAX_COMMENTS_LENGTH = 2000

# NUMERIC(10, 2)
MAX_PRICE = Decimal("100000000")
CENTS = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class ValidatedListing:
    listing: NewListing
    images: tuple[ImageUpload, ...]


class _Errors:
    def __init__(self) -> None:
        self.items: list[dict[str, str]] = []

    def add(self, field: str, message: str, code: str) -> None:
        self.items.append({"field": field, "message": message, "code": code})


def validate_listing_draft(draft: ListingDraft) -> ValidatedListing:
    """
    Validate a create-listing submission.

    All fields are checked; the resulting error lists every failure in
    form order, not just the first one.

    Raises:
        ValidationError: With one entry per failed check
    """
    errors = _Errors()

    book_title = _required_text(draft.book_title, "book_title", MAX_TITLE_LENGTH, errors)
    author = _required_text(draft.author, "author", MAX_AUTHOR_LENGTH, errors)
    publish_year = _required_int(
        draft.publish_year, "publish_year", MIN_PUBLISH_YEAR, MAX_PUBLISH_YEAR, errors
    )
    program_name = _required_text(
        draft.program_name, "program_name", MAX_PROGRAM_NAME_LENGTH, errors
    )
    program_year = _required_int(
        draft.program_year, "program_year", PROGRAM_YEARS[0], PROGRAM_YEARS[-1], errors
    )
    price = _required_price(draft.price, errors)
    condition_type = _required_condition(draft.condition_type, errors)
    comments = _optional_text(draft.comments, "comments", MAX_COMMENTS_LENGTH, errors)
    _check_images(draft.images, errors)

    if errors.items:
        raise ValidationError(errors=errors.items)

    return ValidatedListing(
        listing=NewListing(
            book_title=book_title,  # type: ignore[arg-type]
            author=author,  # type: ignore[arg-type]
            publish_year=publish_year,  # type: ignore[arg-type]
            program_name=program_name,  # type: ignore[arg-type]
            program_year=program_year,  # type: ignore[arg-type]
            price=price,  # type: ignore[arg-type]
            condition_type=condition_type,  # type: ignore[arg-type]
            comments=comments,
        ),
        images=tuple(draft.images),
    )


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _required_text(value: str | None, field: str, max_length: int, errors: _Errors) -> str | None:
    if _blank(value):
        errors.add(field, "This field is required", "REQUIRED")
        return None
    text = value.strip()  # type: ignore[union-attr]
    if len(text) > max_length:
        errors.add(field, f"Must be at most {max_length} characters", "TOO_LONG")
        return None
    return text


def _optional_text(value: str | None, field: str, max_length: int, errors: _Errors) -> str | None:
    if _blank(value):
        return None
    text = value.strip()  # type: ignore[union-attr]
    if len(text) > max_length:
        errors.add(field, f"Must be at most {max_length} characters", "TOO_LONG")
        return None
    return text


def _required_int(
    value: str | None, field: str, minimum: int, maximum: int, errors: _Errors
) -> int | None:
    if _blank(value):
        errors.add(field, "This field is required", "REQUIRED")
        return None
    try:
        number = int(value.strip())  # type: ignore[union-attr]
    except ValueError:
        errors.add(field, "Must be a whole number", "INVALID_NUMBER")
        return None
    if not minimum <= number <= maximum:
        errors.add(field, f"Must be between {minimum} and {maximum}", "OUT_OF_RANGE")
        return None
    return number


def _required_price(value: str | None, errors: _Errors) -> Decimal | None:
    if _blank(value):
        errors.add("price", "This field is required", "REQUIRED")
        return None
    try:
        price = Decimal(value.strip())  # type: ignore[union-attr]
    except InvalidOperation:
        errors.add("price", "Must be a number", "INVALID_NUMBER")
        return None
    if not price.is_finite():
        errors.add("price", "Must be a number", "INVALID_NUMBER")
        return None
    if price < 0:
        errors.add("price", "Must be greater than or equal to 0", "NEGATIVE")
        return None
    if price >= MAX_PRICE:
        errors.add("price", f"Must be less than {MAX_PRICE}", "OUT_OF_RANGE")
        return None
    if price != price.quantize(CENTS):
        errors.add("price", "Must have at most 2 decimal places", "INVALID_PRECISION")
        return None
    return price.quantize(CENTS)


def _required_condition(value: str | None, errors: _Errors) -> ConditionType | None:
    if _blank(value):
        errors.add("condition_type", "This field is required", "REQUIRED")
        return None
    try:
        return ConditionType(value.strip())  # type: ignore[union-attr]
    except ValueError:
        choices = ", ".join(condition.value for condition in ConditionType)
        errors.add("condition_type", f"Must be one of: {choices}", "INVALID_CHOICE")
        return None


def _check_images(images: tuple[ImageUpload, ...], errors: _Errors) -> None:
    if not images:
        errors.add("images", "At least one image is required", "REQUIRED")
        return
    if len(images) > MAX_IMAGES:
        errors.add("images", f"Maximum {MAX_IMAGES} images allowed", "TOO_MANY")
        return
    for image in images:
        if media_type(image.content_type) not in ACCEPTED_IMAGE_TYPES:
            errors.add(
                "images",
                f"'{image.filename}': only PNG and JPEG images are allowed",
                "INVALID_TYPE",
            )
        elif not image.content:
            errors.add("images", f"'{image.filename}': file is empty", "EMPTY_FILE")


def media_type(content_type: str | None) -> str:
    """Bare, lower-cased media type of a Content-Type value."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()
