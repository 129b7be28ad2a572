"""
Test suite for the /api/listings and /api/programs routes.

Routes are exercised end to end through real use cases backed by the
in-memory listing repository; only the session identity and image
storage are substituted through dependency_overrides.
"""

from __future__ import annotations

from decimal import Decimal
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware

from campus_books.adapters.in_memory_listing_repository import InMemoryListingRepository
from campus_books.adapters.in_memory_user_repository import InMemoryUserRepository
from campus_books.domain.errors import PersistenceError
from campus_books.domain.listing import ListingStatus, Seller
from campus_books.domain.user import AuthenticatedUser
from campus_books.entrypoints.http.dependencies import (
    get_create_listing_use_case,
    get_current_user,
    get_current_user_use_case,
    get_get_listing_by_id_use_case,
    get_list_programs_use_case,
    get_search_listings_use_case,
)
from campus_books.entrypoints.http.exception_handlers import register_exception_handlers
from campus_books.entrypoints.http.routes.listings import router
from campus_books.ports.image_storage import ImageStorage
from campus_books.use_cases.authenticate_user import GetCurrentUser
from campus_books.use_cases.create_listing import CreateListing
from campus_books.use_cases.get_listing_by_id import GetListingById
from campus_books.use_cases.list_programs import ListPrograms
from campus_books.use_cases.search_listings import SearchListings
from factories import JPEG_BYTES, PNG_BYTES, make_listing

VALID_FORM = {
    "book_title": "Calculus",
    "author": "James Stewart",
    "publish_year": "2020",
    "program_name": "Mathematics",
    "program_year": "1",
    "price": "45.50",
    "condition_type": "Good",
    "comments": "Some pencil notes",
}


@pytest.fixture
def repository(seller: AuthenticatedUser) -> InMemoryListingRepository:
    listings = [
        make_listing("1", minutes=0),
        make_listing(
            "2",
            minutes=10,
            book_title="C++ Primer",
            author="Stanley Lippman",
            program_name="Computer Science",
            price=Decimal("60.00"),
            condition_type="Fair",
        ),
        make_listing("3", minutes=20, book_title="Withdrawn", status=ListingStatus.REMOVED),
    ]
    listings += [
        make_listing(f"bulk-{i:02d}", minutes=-100 + i, book_title=f"Reader {i}", program_name="Nursing")
        for i in range(28)
    ]
    sellers = {
        seller.user_id: Seller(
            first_name=seller.first_name, last_name=seller.last_name, email=seller.email
        )
    }
    return InMemoryListingRepository(listings, sellers=sellers)


@pytest.fixture
def storage() -> Mock:
    storage = Mock(spec=ImageStorage)
    storage.save.side_effect = lambda image: f"uploads/{image.filename}"
    return storage


@pytest.fixture
def app(
    repository: InMemoryListingRepository, storage: Mock, seller: AuthenticatedUser
) -> FastAPI:
    """Test app with the listings router, exception handlers and overrides."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.add_middleware(SessionMiddleware, secret_key="test-secret")
    test_app.include_router(router, prefix="/api")

    test_app.dependency_overrides[get_search_listings_use_case] = lambda: SearchListings(repository)
    test_app.dependency_overrides[get_get_listing_by_id_use_case] = lambda: GetListingById(repository)
    test_app.dependency_overrides[get_list_programs_use_case] = lambda: ListPrograms(repository)
    test_app.dependency_overrides[get_create_listing_use_case] = lambda: CreateListing(
        repository, storage
    )
    test_app.dependency_overrides[get_current_user] = lambda: seller
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client."""
    return TestClient(app, raise_server_exceptions=False)


# ==============================================================================
# GET /api/listings
# ==============================================================================


def test_default_browse_returns_first_page(client: TestClient) -> None:
    response = client.get("/api/listings")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 30
    assert body["page"] == 1
    assert body["page_size"] == 25
    assert body["total_pages"] == 2
    assert (body["start_item"], body["end_item"]) == (1, 25)
    assert len(body["listings"]) == 25
    # Newest first; the removed listing never shows up
    assert [listing["listing_id"] for listing in body["listings"][:2]] == ["2", "1"]


def test_listing_fields_serialized(client: TestClient) -> None:
    listing = client.get("/api/listings", params={"search": "organic"}).json()["listings"][0]

    assert listing["listing_id"] == "1"
    assert listing["price"] == "120.00"
    assert listing["image1_path"] == "uploads/book5.jpg"
    assert listing["image2_path"] is None
    assert listing["first_name"] == "Priya"
    assert "email" not in listing


def test_search_and_price_cap(client: TestClient) -> None:
    body = client.get("/api/listings", params={"search": "organic", "price_max": "150"}).json()

    assert [listing["listing_id"] for listing in body["listings"]] == ["1"]
    assert body["total"] == 1
    assert body["total_pages"] == 1


def test_low_price_cap_excludes(client: TestClient) -> None:
    body = client.get("/api/listings", params={"search": "organic", "price_max": "50"}).json()

    assert body["listings"] == []
    assert body["total"] == 0
    assert (body["start_item"], body["end_item"]) == (0, 0)


def test_program_year_mismatch_excludes(client: TestClient) -> None:
    body = client.get(
        "/api/listings", params={"program_name": "Science", "program_year": "1"}
    ).json()

    assert body["total"] == 0


def test_special_characters_match_literally(client: TestClient) -> None:
    assert client.get("/api/listings", params={"search": "C++"}).json()["total"] == 1
    assert client.get("/api/listings", params={"search": "%"}).json()["total"] == 0


def test_non_numeric_filters_ignored(client: TestClient) -> None:
    body = client.get(
        "/api/listings", params={"price_min": "cheap", "program_year": "second"}
    ).json()

    assert body["total"] == 30


def test_out_of_range_page_clamped(client: TestClient) -> None:
    body = client.get("/api/listings", params={"page": 99}).json()

    assert body["page"] == 2
    assert (body["start_item"], body["end_item"]) == (26, 30)
    assert len(body["listings"]) == 5


def test_custom_limit(client: TestClient) -> None:
    body = client.get("/api/listings", params={"limit": 10, "page": 3}).json()

    assert body["total_pages"] == 3
    assert (body["start_item"], body["end_item"]) == (21, 30)


@pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"page": "abc"}])
def test_invalid_paging_returns_400(client: TestClient, params: dict) -> None:
    response = client.get("/api/listings", params=params)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_storage_failure_returns_500(app: FastAPI, client: TestClient) -> None:
    failing = Mock(spec=SearchListings)
    failing.execute.side_effect = PersistenceError("Failed to load listings")
    app.dependency_overrides[get_search_listings_use_case] = lambda: failing

    response = client.get("/api/listings")

    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to load listings",
        "detail": "Failed to load listings",
        "code": "INTERNAL_ERROR",
    }


# ==============================================================================
# GET /api/listings/{listing_id}
# ==============================================================================


def test_detail_includes_seller_contact(client: TestClient) -> None:
    response = client.get("/api/listings/1")

    assert response.status_code == 200
    body = response.json()
    assert body["book_title"] == "Organic Chemistry"
    assert body["email"] == "priya.shah@campus.edu"
    assert body["last_name"] == "Shah"


def test_detail_unknown_listing_returns_404(client: TestClient) -> None:
    response = client.get("/api/listings/does-not-exist")

    assert response.status_code == 404
    body = response.json()
    assert body["code"] == "NOT_FOUND"
    assert body["error"] == "Listing with identifier 'does-not-exist' not found"


# ==============================================================================
# POST /api/listings
# ==============================================================================


def test_create_listing(
    client: TestClient, repository: InMemoryListingRepository, seller: AuthenticatedUser
) -> None:
    response = client.post(
        "/api/listings",
        data=VALID_FORM,
        files=[
            ("images", ("front.png", PNG_BYTES, "image/png")),
            ("images", ("back.jpg", JPEG_BYTES, "image/jpeg")),
        ],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Listing created successfully!"

    created = repository.get_by_id(body["listing_id"])
    assert created is not None
    assert created.seller_id == seller.user_id
    assert created.price == Decimal("45.50")
    assert created.image_paths == ("uploads/front.png", "uploads/back.jpg")


def test_new_listing_appears_first_in_browse(client: TestClient) -> None:
    created = client.post(
        "/api/listings",
        data=VALID_FORM,
        files=[("images", ("front.png", PNG_BYTES, "image/png"))],
    ).json()

    first = client.get("/api/listings").json()["listings"][0]

    assert first["listing_id"] == created["listing_id"]


def test_submitted_seller_id_is_ignored(
    client: TestClient, repository: InMemoryListingRepository, seller: AuthenticatedUser
) -> None:
    response = client.post(
        "/api/listings",
        data={**VALID_FORM, "seller_id": "someone-else"},
        files=[("images", ("front.png", PNG_BYTES, "image/png"))],
    )

    created = repository.get_by_id(response.json()["listing_id"])
    assert created is not None
    assert created.seller_id == seller.user_id


def test_create_without_images_returns_400(client: TestClient, storage: Mock) -> None:
    response = client.post("/api/listings", data=VALID_FORM)

    assert response.status_code == 400
    body = response.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["error"] == "Validation failed"
    assert body["errors"] == [
        {"field": "images", "message": "At least one image is required", "code": "REQUIRED"}
    ]
    storage.save.assert_not_called()


def test_create_reports_every_invalid_field(client: TestClient) -> None:
    response = client.post(
        "/api/listings",
        data={**VALID_FORM, "book_title": "", "price": "-3", "condition_type": "Mint"},
        files=[("images", ("notes.pdf", b"%PDF-1.4", "application/pdf"))],
    )

    assert response.status_code == 400
    assert [(error["field"], error["code"]) for error in response.json()["errors"]] == [
        ("book_title", "REQUIRED"),
        ("price", "NEGATIVE"),
        ("condition_type", "INVALID_CHOICE"),
        ("images", "INVALID_TYPE"),
    ]


def test_create_with_four_images_returns_400(client: TestClient) -> None:
    files = [("images", (f"{i}.png", PNG_BYTES, "image/png")) for i in range(4)]

    response = client.post("/api/listings", data=VALID_FORM, files=files)

    assert response.status_code == 400
    assert response.json()["errors"][0]["code"] == "TOO_MANY"


def test_create_requires_login(app: FastAPI, client: TestClient, storage: Mock) -> None:
    del app.dependency_overrides[get_current_user]
    app.dependency_overrides[get_current_user_use_case] = lambda: GetCurrentUser(
        InMemoryUserRepository()
    )

    response = client.post(
        "/api/listings",
        data=VALID_FORM,
        files=[("images", ("front.png", PNG_BYTES, "image/png"))],
    )

    assert response.status_code == 401
    assert response.json() == {
        "error": "Not logged in",
        "detail": "Not logged in",
        "code": "UNAUTHORIZED",
    }
    storage.save.assert_not_called()


# ==============================================================================
# GET /api/programs
# ==============================================================================


def test_programs(client: TestClient) -> None:
    response = client.get("/api/programs")

    assert response.status_code == 200
    assert response.json() == ["Computer Science", "Nursing", "Science"]
