from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from campus_books.domain.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


class ListingsSearchQueryDTO(BaseModel):
    """Query parameters for browsing listings.

    Filter values are accepted as raw strings: blank values are ignored and
    non-numeric price bounds or program years are treated as absent.
    """

    search: str | None = Field(
        default=None,
        description="Case-insensitive substring match on title, author or program",
        examples=["chem"],
    )
    program_name: str | None = Field(
        default=None,
        description="Filter by program (exact match)",
        examples=["Science"],
    )
    program_year: str | None = Field(
        default=None,
        description="Filter by program year 1-4 (exact match)",
        examples=["2"],
    )
    condition_type: str | None = Field(
        default=None,
        description="Filter by condition (exact match)",
        examples=["Like New"],
    )
    price_min: str | None = Field(
        default=None,
        description="Minimum price (inclusive, decimal as string)",
        examples=["20.00"],
    )
    price_max: str | None = Field(
        default=None,
        description="Maximum price (inclusive, decimal as string)",
        examples=["150.00"],
    )
    page: int = Field(
        default=1,
        description="Page number; out-of-range pages are clamped",
        examples=[1],
    )
    limit: int = Field(
        default=DEFAULT_PAGE_SIZE,
        description="Listings per page",
        examples=[DEFAULT_PAGE_SIZE],
        ge=1,
        le=MAX_PAGE_SIZE,
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "search": "organic",
                "program_name": "Science",
                "program_year": "2",
                "condition_type": "Like New",
                "price_min": "20.00",
                "price_max": "150.00",
                "page": 1,
                "limit": DEFAULT_PAGE_SIZE,
            }
        }
    )


class ListingResponseDTO(BaseModel):
    listing_id: str
    seller_id: str
    book_title: str
    author: str
    publish_year: int
    program_name: str
    program_year: int
    price: str
    condition_type: str
    comments: str | None = None
    image1_path: str | None = None
    image2_path: str | None = None
    image3_path: str | None = None
    status: str
    created_at: datetime
    first_name: str | None = None
    last_name: str | None = None


class ListingDetailResponseDTO(ListingResponseDTO):
    email: str | None = None


class ListingsSearchResponseDTO(BaseModel):
    listings: list[ListingResponseDTO]
    total: int
    page: int
    page_size: int
    total_pages: int
    start_item: int
    end_item: int


class CreateListingResponseDTO(BaseModel):
    success: bool = True
    message: str = "Listing created successfully!"
    listing_id: str
