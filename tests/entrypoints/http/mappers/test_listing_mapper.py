"""
Tests for ListingMapper.

Covers lenient parsing of query strings into domain filters and the
listing → DTO conversions (price formatting, image slots, seller fields).
"""

from __future__ import annotations

from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal

import pytest

from campus_books.domain.listing import ListingStatus
from campus_books.domain.pagination import PageWindow
from campus_books.entrypoints.http.dtos.listings import ListingsSearchQueryDTO
from campus_books.entrypoints.http.mappers.listing_mapper import (
    ListingMapper,
    parse_price_bound,
    parse_program_year,
)
from campus_books.use_cases.search_listings import SearchListingsResponse
from factories import make_listing, png_upload


# ==============================================================================
# Query Parsing
# ==============================================================================


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, None),
        ("", None),
        ("  ", None),
        ("150", Decimal("150")),
        (" 19.99 ", Decimal("19.99")),
        ("0", Decimal("0")),
        ("abc", None),
        ("NaN", None),
        ("Infinity", None),
    ],
)
def test_parse_price_bound(raw: str | None, expected: Decimal | None) -> None:
    assert parse_price_bound(raw) == expected


@pytest.mark.parametrize(
    ("raw", "rounding", "expected"),
    [
        ("1e999999999", ROUND_FLOOR, Decimal("100000000.00")),
        ("-1e999999999", ROUND_CEILING, Decimal("-100000000.00")),
        ("1e-999999999", ROUND_CEILING, Decimal("0.01")),
        ("1e-999999999", ROUND_FLOOR, Decimal("0.00")),
        ("10.005", ROUND_CEILING, Decimal("10.01")),
        ("10.005", ROUND_FLOOR, Decimal("10.00")),
    ],
)
def test_parse_price_bound_keeps_extreme_exponents_in_column_range(
    raw: str, rounding: str, expected: Decimal
) -> None:
    bound = parse_price_bound(raw, rounding)

    assert bound == expected
    assert bound.as_tuple().exponent == -2  # type: ignore[union-attr]


def test_to_domain_filters_rounds_bounds_inward() -> None:
    dto = ListingsSearchQueryDTO(price_min="19.991", price_max="1e999999999")

    filters = ListingMapper.to_domain_filters(dto)

    assert filters.price_min == Decimal("20.00")
    assert filters.price_max == Decimal("100000000.00")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, None), ("", None), ("2", 2), (" 4 ", 4), ("two", None), ("1.5", None)],
)
def test_parse_program_year(raw: str | None, expected: int | None) -> None:
    assert parse_program_year(raw) == expected


def test_to_domain_filters() -> None:
    dto = ListingsSearchQueryDTO(
        search="  organic ",
        program_name="Science",
        program_year="2",
        condition_type=" ",
        price_min="abc",
        price_max="150",
    )

    filters = ListingMapper.to_domain_filters(dto)

    assert filters.search == "organic"
    assert filters.program_name == "Science"
    assert filters.program_year == 2
    assert filters.condition_type is None
    assert filters.price_min is None
    assert filters.price_max == Decimal("150")


def test_to_domain_request_maps_limit_to_page_size() -> None:
    request = ListingMapper.to_domain_request(ListingsSearchQueryDTO(page=3, limit=10))

    assert request.page.page == 3
    assert request.page.page_size == 10


def test_to_draft_ignores_unknown_fields() -> None:
    draft = ListingMapper.to_draft(
        {"book_title": "Calculus", "seller_id": "someone-else"}, [png_upload()]
    )

    assert draft.book_title == "Calculus"
    assert draft.author is None
    assert len(draft.images) == 1
    assert not hasattr(draft, "seller_id")


# ==============================================================================
# Responses
# ==============================================================================


def test_listing_response_fields() -> None:
    listing = make_listing(
        "abc",
        price=Decimal("45"),
        image_paths=("uploads/a.png", "uploads/b.png"),
    )

    dto = ListingMapper.to_listing_response(listing)

    assert dto.listing_id == "abc"
    assert dto.price == "45.00"
    assert (dto.image1_path, dto.image2_path, dto.image3_path) == (
        "uploads/a.png",
        "uploads/b.png",
        None,
    )
    assert dto.status == "active"
    assert dto.first_name == "Priya"
    assert dto.last_name == "Shah"
    assert "email" not in dto.model_dump()


def test_listing_without_seller() -> None:
    dto = ListingMapper.to_detail_response(make_listing(seller=None))

    assert dto.first_name is None
    assert dto.email is None


def test_detail_response_includes_seller_email() -> None:
    dto = ListingMapper.to_detail_response(make_listing(status=ListingStatus.REMOVED))

    assert dto.email == "priya.shah@campus.edu"
    assert dto.status == "removed"


def test_search_response_echoes_clamped_window() -> None:
    listings = [make_listing(str(i)) for i in range(10)]
    result = SearchListingsResponse(
        listings=listings,
        total_count=60,
        window=PageWindow.compute(9, 25, 60),
    )

    dto = ListingMapper.to_search_response(result)

    assert len(dto.listings) == 10
    assert dto.total == 60
    assert dto.page == 3
    assert dto.page_size == 25
    assert dto.total_pages == 3
    assert (dto.start_item, dto.end_item) == (51, 60)
