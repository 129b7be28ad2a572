"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Only stateless singletons should use lru_cache.

Identity is resolved once per request by get_current_user and handed to
use cases as an explicit AuthenticatedUser argument.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from campus_books.adapters.disk_image_storage import DiskImageStorage
from campus_books.adapters.postgres_listing_repository import PostgresListingRepository
from campus_books.adapters.postgres_user_repository import PostgresUserRepository
from campus_books.domain.user import AuthenticatedUser
from campus_books.infra.config import upload_dir
from campus_books.infra.db.session import get_session
from campus_books.ports.image_storage import ImageStorage
from campus_books.use_cases.authenticate_user import AuthenticateUser, GetCurrentUser
from campus_books.use_cases.create_listing import CreateListing
from campus_books.use_cases.get_listing_by_id import GetListingById
from campus_books.use_cases.list_programs import ListPrograms
from campus_books.use_cases.search_listings import SearchListings

SESSION_USER_KEY = "user_id"


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    The underlying get_session() context manager commits on success,
    rolls back on exception and always closes the session.

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


@lru_cache
def get_image_storage() -> ImageStorage:
    """Disk image storage (stateless, shared)."""
    return DiskImageStorage(root=upload_dir())


def get_search_listings_use_case(db: Session = Depends(get_db)) -> SearchListings:
    """
    Factory function that returns a configured SearchListings use case.

    Called per-request: fresh repository, fresh use case, isolated session.
    """
    repository = PostgresListingRepository(session=db)
    return SearchListings(listing_repository=repository)


def get_get_listing_by_id_use_case(db: Session = Depends(get_db)) -> GetListingById:
    repository = PostgresListingRepository(session=db)
    return GetListingById(listing_repository=repository)


def get_list_programs_use_case(db: Session = Depends(get_db)) -> ListPrograms:
    repository = PostgresListingRepository(session=db)
    return ListPrograms(listing_repository=repository)


def get_create_listing_use_case(
    db: Session = Depends(get_db),
    image_storage: ImageStorage = Depends(get_image_storage),
) -> CreateListing:
    repository = PostgresListingRepository(session=db)
    return CreateListing(listing_repository=repository, image_storage=image_storage)


def get_authenticate_user_use_case(db: Session = Depends(get_db)) -> AuthenticateUser:
    return AuthenticateUser(user_repository=PostgresUserRepository(session=db))


def get_current_user_use_case(db: Session = Depends(get_db)) -> GetCurrentUser:
    return GetCurrentUser(user_repository=PostgresUserRepository(session=db))


def get_current_user(
    request: Request,
    use_case: GetCurrentUser = Depends(get_current_user_use_case),
) -> AuthenticatedUser:
    """
    Resolve the session cookie to the caller's identity.

    Raises:
        UnauthorizedError: If there is no active session
    """
    return use_case.execute(request.session.get(SESSION_USER_KEY))
