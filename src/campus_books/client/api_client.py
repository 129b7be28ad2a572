"""Async HTTP client for the Campus Books API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from campus_books.client.models import BrowseQuery, ListingsPage
from campus_books.domain.errors import NotFoundError, UnauthorizedError, ValidationError
from campus_books.domain.listing import ImageUpload, ListingDraft
from campus_books.domain.listing_validation import validate_listing_draft

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "Connection error. Please try again."
SERVER_ERROR_MESSAGE = "Something went wrong. Please try again."

DRAFT_FIELDS = (
    "book_title",
    "author",
    "publish_year",
    "program_name",
    "program_year",
    "price",
    "condition_type",
    "comments",
)


class ApiError(Exception):
    """Request failed for a reason the user can only retry."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ApiConnectionError(ApiError):
    """The server could not be reached."""


class ListingsApiClient:
    """
    Thin async wrapper over the HTTP API.

    The underlying httpx client keeps the session cookie between calls.
    Error responses are raised as the matching domain errors so callers
    handle server and client-side validation the same way.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> ListingsApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def login(self, email: str, password: str) -> dict[str, Any]:
        response = await self._request(
            "POST", "/api/login", json={"email": email, "password": password}
        )
        return _json(response)["user"]

    async def current_user(self) -> dict[str, Any] | None:
        try:
            response = await self._request("GET", "/api/user")
        except UnauthorizedError:
            return None
        return _json(response)["user"]

    async def logout(self) -> None:
        await self._request("POST", "/api/logout")

    async def list_programs(self) -> list[str]:
        response = await self._request("GET", "/api/programs")
        return list(_json(response))

    async def search_listings(self, query: BrowseQuery) -> ListingsPage:
        response = await self._request("GET", "/api/listings", params=query.to_params())
        body = _json(response)
        try:
            return ListingsPage.from_json(body)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed listings page", extra={"error_type": type(exc).__name__})
            raise ApiError(SERVER_ERROR_MESSAGE, status_code=response.status_code) from exc

    async def get_listing(self, listing_id: str) -> dict[str, Any]:
        response = await self._request(
            "GET", f"/api/listings/{listing_id}", resource="Listing", identifier=listing_id
        )
        return _json(response)

    async def create_listing(
        self, fields: dict[str, str | None], images: list[ImageUpload]
    ) -> str:
        """
        Submit a new listing.

        The same rules the server applies are checked first, so an invalid
        form never reaches the network. The server still re-validates.

        Raises:
            ValidationError: From local pre-validation or a 400 response
        """
        draft = ListingDraft(
            images=tuple(images),
            **{name: fields.get(name) for name in DRAFT_FIELDS},
        )
        validate_listing_draft(draft)

        data = {name: value for name, value in fields.items() if name in DRAFT_FIELDS and value}
        files = [("images", (image.filename, image.content, image.content_type)) for image in images]

        response = await self._request("POST", "/api/listings", data=data, files=files)
        return _json(response)["listing_id"]

    async def _request(
        self,
        method: str,
        url: str,
        resource: str = "Resource",
        identifier: str | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            logger.warning("Request failed", extra={"url": url, "error_type": type(exc).__name__})
            raise ApiConnectionError(CONNECTION_ERROR_MESSAGE) from exc
        except httpx.HTTPError as exc:
            logger.warning("Request failed", extra={"url": url, "error_type": type(exc).__name__})
            raise ApiError(SERVER_ERROR_MESSAGE) from exc

        if response.is_success:
            return response

        raise _error_from_response(response, resource, identifier)


def _json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        logger.warning(
            "Response body is not JSON",
            extra={"status_code": response.status_code, "url": str(response.url)},
        )
        raise ApiError(SERVER_ERROR_MESSAGE, status_code=response.status_code) from exc

def _error_from_response(
    response: httpx.Response, resource: str, identifier: str | None
) -> Exception:
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    detail = body.get("detail")

    if response.status_code == 400:
        return ValidationError(message=detail, errors=body.get("errors"))
    if response.status_code == 401:
        return UnauthorizedError(detail or "Not logged in")
    if response.status_code == 404:
        return NotFoundError(resource=resource, identifier=identifier)

    logger.warning(
        "Unexpected response",
        extra={"status_code": response.status_code, "url": str(response.url)},
    )
    return ApiError(SERVER_ERROR_MESSAGE, status_code=response.status_code)
