from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from campus_books.domain.listing import ImageUpload
from campus_books.domain.user import AuthenticatedUser
from campus_books.entrypoints.http.dependencies import (
    get_create_listing_use_case,
    get_current_user,
    get_get_listing_by_id_use_case,
    get_list_programs_use_case,
    get_search_listings_use_case,
)
from campus_books.entrypoints.http.dtos.listings import (
    CreateListingResponseDTO,
    ListingDetailResponseDTO,
    ListingsSearchQueryDTO,
    ListingsSearchResponseDTO,
)
from campus_books.entrypoints.http.error_responses import ERROR_RESPONSES
from campus_books.entrypoints.http.mappers.listing_mapper import ListingMapper
from campus_books.use_cases.create_listing import CreateListing, CreateListingRequest
from campus_books.use_cases.get_listing_by_id import GetListingById, GetListingByIdRequest
from campus_books.use_cases.list_programs import ListPrograms
from campus_books.use_cases.search_listings import SearchListings

router = APIRouter(tags=["Listings"])


@router.get(
    "/listings",
    response_model=ListingsSearchResponseDTO,
    summary="Browse listings",
    description="""
    Search active listings with optional filters and pagination.

    ## Search
    - Case-insensitive substring match on book title, author or program
    - `%`, `_` and `\\` in the term are matched literally

    ## Filters
    - All filters use AND semantics
    - program_name, program_year, condition_type: exact match
    - price_min/price_max: inclusive; non-numeric values are ignored

    ## Pagination
    - Default limit: 25, max limit: 100
    - Out-of-range pages are clamped to the nearest valid page

    ## Example
    ```
    GET /api/listings?search=organic&price_max=150&page=1
    ```
    """,
    responses={400: ERROR_RESPONSES[400], 500: ERROR_RESPONSES[500]},
)
def search_listings(
    query: Annotated[ListingsSearchQueryDTO, Query()],
    use_case: SearchListings = Depends(get_search_listings_use_case),
) -> ListingsSearchResponseDTO:
    """Browse endpoint following parse → execute → map → return pattern."""
    request = ListingMapper.to_domain_request(query)
    result = use_case.execute(request)
    return ListingMapper.to_search_response(result)


@router.get(
    "/listings/{listing_id}",
    response_model=ListingDetailResponseDTO,
    summary="Get listing detail",
    responses={404: ERROR_RESPONSES[404], 500: ERROR_RESPONSES[500]},
)
def get_listing(
    listing_id: str,
    use_case: GetListingById = Depends(get_get_listing_by_id_use_case),
) -> ListingDetailResponseDTO:
    result = use_case.execute(GetListingByIdRequest(listing_id=listing_id))
    return ListingMapper.to_detail_response(result.listing)


@router.post(
    "/listings",
    response_model=CreateListingResponseDTO,
    summary="Create a listing",
    description="""
    Multipart form: listing fields plus 1-3 `images` (PNG or JPEG).

    The seller is the logged-in user. Every invalid field is reported
    in the `errors` array of the 400 response.
    """,
    responses={
        400: ERROR_RESPONSES[400],
        401: ERROR_RESPONSES[401],
        500: ERROR_RESPONSES[500],
    },
)
def create_listing(
    seller: AuthenticatedUser = Depends(get_current_user),
    book_title: str | None = Form(default=None),
    author: str | None = Form(default=None),
    publish_year: str | None = Form(default=None),
    program_name: str | None = Form(default=None),
    program_year: str | None = Form(default=None),
    price: str | None = Form(default=None),
    condition_type: str | None = Form(default=None),
    comments: str | None = Form(default=None),
    images: list[UploadFile] = File(default=[]),
    use_case: CreateListing = Depends(get_create_listing_use_case),
) -> CreateListingResponseDTO:
    uploads = [
        ImageUpload(
            filename=image.filename or "",
            content_type=image.content_type or "",
            content=image.file.read(),
        )
        for image in images
        # Browsers send an empty part when no file was picked
        if image.filename or image.size
    ]
    draft = ListingMapper.to_draft(
        {
            "book_title": book_title,
            "author": author,
            "publish_year": publish_year,
            "program_name": program_name,
            "program_year": program_year,
            "price": price,
            "condition_type": condition_type,
            "comments": comments,
        },
        uploads,
    )

    result = use_case.execute(CreateListingRequest(seller=seller, draft=draft))
    return CreateListingResponseDTO(listing_id=result.listing_id)


@router.get(
    "/programs",
    response_model=list[str],
    summary="Programs with active listings",
    responses={500: ERROR_RESPONSES[500]},
)
def list_programs(use_case: ListPrograms = Depends(get_list_programs_use_case)) -> list[str]:
    return use_case.execute()
