from __future__ import annotations

from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal, InvalidOperation
from typing import Any

from campus_books.domain.listing import ImageUpload, Listing, ListingDraft, ListingFilters
from campus_books.domain.listing_validation import MAX_PRICE
from campus_books.domain.pagination import PageRequest
from campus_books.entrypoints.http.dtos.listings import (
    ListingDetailResponseDTO,
    ListingResponseDTO,
    ListingsSearchQueryDTO,
    ListingsSearchResponseDTO,
)
from campus_books.use_cases.search_listings import (
    SearchListingsRequest,
    SearchListingsResponse,
)


CENT = Decimal("0.01")


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def parse_price_bound(value: str | None, rounding: str = ROUND_FLOOR) -> Decimal | None:
    """Lenient price filter parsing: anything non-numeric counts as absent.

    Finite bounds are clamped to +/-MAX_PRICE and rounded to whole cents in
    the ``rounding`` direction. Prices are stored in cents, so a lower bound
    rounded up or an upper bound rounded down matches the same listings.
    """
    text = _blank_to_none(value)
    if text is None:
        return None
    try:
        price = Decimal(text)
    except InvalidOperation:
        return None
    if not price.is_finite():
        return None
    price = max(-MAX_PRICE, min(price, MAX_PRICE))
    return price.quantize(CENT, rounding=rounding)


def parse_program_year(value: str | None) -> int | None:
    """Lenient program year parsing: anything non-integer counts as absent."""
    text = _blank_to_none(value)
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


class ListingMapper:
    """Maps between REST DTOs and domain models for listings."""

    @staticmethod
    def to_domain_filters(dto: ListingsSearchQueryDTO) -> ListingFilters:
        """
        Converts query params to domain filters, handling Decimal conversion.

        Args:
            dto: The data transfer object containing search query parameters

        Returns:
            ListingFilters: Domain filters with Decimal prices
        """
        return ListingFilters(
            search=_blank_to_none(dto.search),
            program_name=_blank_to_none(dto.program_name),
            program_year=parse_program_year(dto.program_year),
            condition_type=_blank_to_none(dto.condition_type),
            price_min=parse_price_bound(dto.price_min, ROUND_CEILING),
            price_max=parse_price_bound(dto.price_max, ROUND_FLOOR),
        )

    @staticmethod
    def to_domain_request(dto: ListingsSearchQueryDTO) -> SearchListingsRequest:
        return SearchListingsRequest(
            filters=ListingMapper.to_domain_filters(dto),
            page=PageRequest(page=dto.page, page_size=dto.limit),
        )

    @staticmethod
    def to_draft(fields: dict[str, str | None], images: list[ImageUpload]) -> ListingDraft:
        """
        Builds the raw create-listing draft from submitted form fields.

        Unknown keys (including any attempt to submit a seller) are ignored.
        """
        return ListingDraft(
            book_title=fields.get("book_title"),
            author=fields.get("author"),
            publish_year=fields.get("publish_year"),
            program_name=fields.get("program_name"),
            program_year=fields.get("program_year"),
            price=fields.get("price"),
            condition_type=fields.get("condition_type"),
            comments=fields.get("comments"),
            images=tuple(images),
        )

    @staticmethod
    def _listing_fields(listing: Listing) -> dict[str, Any]:
        paths = list(listing.image_paths) + [None, None, None]
        seller = listing.seller
        return {
            "listing_id": listing.id,
            "seller_id": listing.seller_id,
            "book_title": listing.book_title,
            "author": listing.author,
            "publish_year": listing.publish_year,
            "program_name": listing.program_name,
            "program_year": listing.program_year,
            "price": f"{listing.price:.2f}",  # Decimal → str at boundary
            "condition_type": listing.condition_type,
            "comments": listing.comments,
            "image1_path": paths[0],
            "image2_path": paths[1],
            "image3_path": paths[2],
            "status": listing.status.value,
            "created_at": listing.created_at,
            "first_name": seller.first_name if seller else None,
            "last_name": seller.last_name if seller else None,
        }

    @staticmethod
    def to_listing_response(listing: Listing) -> ListingResponseDTO:
        return ListingResponseDTO(**ListingMapper._listing_fields(listing))

    @staticmethod
    def to_detail_response(listing: Listing) -> ListingDetailResponseDTO:
        return ListingDetailResponseDTO(
            **ListingMapper._listing_fields(listing),
            email=listing.seller.email if listing.seller else None,
        )

    @staticmethod
    def to_search_response(result: SearchListingsResponse) -> ListingsSearchResponseDTO:
        """
        Converts domain search result to REST response with pagination metadata.

        The page echoed back is the clamped page, not the requested one.
        """
        window = result.window
        return ListingsSearchResponseDTO(
            listings=[ListingMapper.to_listing_response(listing) for listing in result.listings],
            total=result.total_count,
            page=window.page,
            page_size=window.page_size,
            total_pages=window.total_pages,
            start_item=window.start_item,
            end_item=window.end_item,
        )
