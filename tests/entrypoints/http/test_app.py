"""
Unit tests for FastAPI application setup and configuration.

Verifies metadata, router registration under the right prefixes, the
session middleware and the uploads mount, without a database.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from campus_books.adapters.in_memory_listing_repository import InMemoryListingRepository
from campus_books.adapters.in_memory_user_repository import InMemoryUserRepository
from campus_books.entrypoints.http.app import SESSION_COOKIE, build_app
from campus_books.entrypoints.http.dependencies import (
    get_current_user_use_case,
    get_get_listing_by_id_use_case,
    get_list_programs_use_case,
    get_search_listings_use_case,
)
from campus_books.use_cases.authenticate_user import GetCurrentUser
from campus_books.use_cases.get_listing_by_id import GetListingById
from campus_books.use_cases.list_programs import ListPrograms
from campus_books.use_cases.search_listings import SearchListings
from factories import make_listing


def _paths(app: FastAPI) -> set[str]:
    return {getattr(route, "path", "") for route in app.routes}


# ==============================================================================
# Application Creation
# ==============================================================================


def test_build_app_returns_new_fastapi_instance() -> None:
    app1 = build_app()
    app2 = build_app()

    assert isinstance(app1, FastAPI)
    assert app1 is not app2


def test_app_metadata() -> None:
    app = build_app()

    assert app.title == "Campus Books API"
    assert app.version == "0.1.0"
    assert app.docs_url == "/docs"


# ==============================================================================
# Routing
# ==============================================================================


def test_api_routes_served_under_prefix() -> None:
    app = build_app()
    repository = InMemoryListingRepository([make_listing("1")])
    app.dependency_overrides[get_search_listings_use_case] = lambda: SearchListings(repository)
    app.dependency_overrides[get_get_listing_by_id_use_case] = lambda: GetListingById(repository)
    app.dependency_overrides[get_list_programs_use_case] = lambda: ListPrograms(repository)
    app.dependency_overrides[get_current_user_use_case] = lambda: GetCurrentUser(
        InMemoryUserRepository()
    )
    client = TestClient(app)

    assert client.get("/api/programs").status_code == 200
    assert client.get("/api/listings").json()["total"] == 1
    assert client.get("/api/listings/1").json()["book_title"] == "Organic Chemistry"
    assert client.get("/api/user").status_code == 401
    assert client.post("/api/logout").status_code == 200
    assert client.get("/programs").status_code == 404


def test_health_is_at_root() -> None:
    client = TestClient(build_app())

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_uploads_mounted() -> None:
    assert "/uploads" in _paths(build_app())


def test_openapi_lists_listing_endpoints() -> None:
    schema = TestClient(build_app()).get("/openapi.json").json()

    assert schema["info"]["title"] == "Campus Books API"
    assert "get" in schema["paths"]["/api/listings"]
    assert "post" in schema["paths"]["/api/listings"]


# ==============================================================================
# Sessions
# ==============================================================================


def test_logout_without_session_sets_no_cookie() -> None:
    client = TestClient(build_app())

    response = client.post("/api/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert SESSION_COOKIE not in response.cookies
