"""PostgreSQL implementation of ListingRepository."""

from __future__ import annotations

import logging
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_books.adapters.listing_predicates import active_clause, build_listing_predicate
from campus_books.domain.errors import PersistenceError
from campus_books.domain.listing import (
    Listing,
    ListingFilters,
    ListingStatus,
    NewListing,
    Seller,
)
from campus_books.domain.pagination import PageRequest, PageWindow
from campus_books.infra.db.models.listing import ListingRow
from campus_books.ports.listing_repository import ListingRepository, SearchResult

if TYPE_CHECKING:
    from sqlalchemy.sql import Select
    from sqlalchemy.sql.elements import ColumnElement

logger = logging.getLogger(__name__)


class PostgresListingRepository(ListingRepository):
    """
    PostgreSQL implementation of ListingRepository.

    - Uses SQLAlchemy ORM for database access
    - Builds WHERE clauses with listing_predicates (bound parameters only)
    - Returns total_count via COUNT(*) query
    - Converts ListingRow (infrastructure) to Listing (domain)
    - Re-raises storage failures as PersistenceError
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self._session = session

    def search(self, filters: ListingFilters, page: PageRequest) -> SearchResult:
        """
        Search active listings with filters and paging.

        Executes two queries against the same predicate:
        1. COUNT(*) to get total matching listings (before paging)
        2. SELECT ... ORDER BY created_at DESC OFFSET/LIMIT for the clamped page

        The two statements are not wrapped in a snapshot transaction; under
        concurrent writes total_count and rows may be marginally out of step.

        Args:
            filters: Filter criteria (AND semantics) - must be pre-validated
            page: Requested page - must be pre-validated

        Returns:
            SearchResult with listings, total_count and the page window
        """
        predicate = build_listing_predicate(filters)

        try:
            count_query = select(func.count()).select_from(ListingRow).where(predicate)
            total_count = self._session.execute(count_query).scalar() or 0

            window = PageWindow.compute(page.page, page.page_size, total_count)
            if total_count == 0:
                return SearchResult(listings=[], total_count=0, window=window)

            rows = self._session.execute(self._page_query(predicate, window)).scalars().all()
        except SQLAlchemyError as exc:
            logger.error("Listing search failed", exc_info=exc)
            raise PersistenceError("Failed to load listings") from exc

        return SearchResult(
            listings=[self._to_domain(row) for row in rows],
            total_count=total_count,
            window=window,
        )

    def get_by_id(self, listing_id: str) -> Listing | None:
        """
        Get listing by ID.

        Args:
            listing_id: Listing ID (expected to be a UUID string)

        Returns:
            Listing entity if found (any status), None otherwise
        """
        try:
            key = uuid.UUID(listing_id)
        except ValueError:  # Invalid UUID format cannot exist
            return None

        try:
            query = select(ListingRow).where(ListingRow.id == key)
            row = self._session.execute(query).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error("Listing lookup failed", exc_info=exc, extra={"listing_id": listing_id})
            raise PersistenceError("Failed to load listing") from exc

        return self._to_domain(row) if row else None

    def create(self, seller_id: str, listing: NewListing, image_paths: list[str]) -> str:
        """
        Insert a new active listing.

        created_at is filled in by the database; status is always active.

        Returns:
            The new listing id as a string
        """
        paths = list(image_paths) + [None, None, None]
        row = ListingRow(
            id=uuid.uuid4(),
            seller_id=uuid.UUID(seller_id),
            book_title=listing.book_title,
            author=listing.author,
            publish_year=listing.publish_year,
            program_name=listing.program_name,
            program_year=listing.program_year,
            price=listing.price,
            condition_type=listing.condition_type.value,
            comments=listing.comments,
            image1_path=paths[0],
            image2_path=paths[1],
            image3_path=paths[2],
            status=ListingStatus.ACTIVE.value,
        )

        try:
            self._session.add(row)
            self._session.flush()
        except SQLAlchemyError as exc:
            logger.error("Listing insert failed", exc_info=exc, extra={"seller_id": seller_id})
            raise PersistenceError("Failed to create listing") from exc

        return str(row.id)

    def list_distinct_programs(self) -> list[str]:
        query = (
            select(ListingRow.program_name)
            .where(active_clause())
            .distinct()
            .order_by(ListingRow.program_name.asc())
        )

        try:
            return list(self._session.execute(query).scalars().all())
        except SQLAlchemyError as exc:
            logger.error("Program lookup failed", exc_info=exc)
            raise PersistenceError("Failed to load programs") from exc

    def _page_query(
        self, predicate: ColumnElement[bool], window: PageWindow
    ) -> Select[tuple[ListingRow]]:
        # id breaks created_at ties so consecutive pages never overlap
        return (
            select(ListingRow)
            .where(predicate)
            .order_by(ListingRow.created_at.desc(), ListingRow.id.desc())
            .offset(window.offset)
            .limit(window.limit)
        )

    def _to_domain(self, row: ListingRow) -> Listing:
        """
        Convert database model (ListingRow) to domain entity (Listing).

        Args:
            row: SQLAlchemy ListingRow model

        Returns:
            Listing domain entity
        """
        seller = None
        if row.seller is not None:
            seller = Seller(
                first_name=row.seller.first_name,
                last_name=row.seller.last_name,
                email=row.seller.email,
            )

        return Listing(
            id=str(row.id),  # Convert UUID to string
            seller_id=str(row.seller_id),
            book_title=row.book_title,
            author=row.author,
            publish_year=row.publish_year,
            program_name=row.program_name,
            program_year=row.program_year,
            price=row.price,  # Already Decimal from NUMERIC column
            condition_type=row.condition_type,
            comments=row.comments,
            image_paths=row.image_paths,
            status=ListingStatus(row.status),
            created_at=row.created_at,
            seller=seller,
        )
