"""SQLAlchemy predicate construction for listing queries.

Every caller-supplied value goes into the statement as a bound parameter;
nothing here formats values into SQL text.
"""

from __future__ import annotations

from sqlalchemy import and_, or_
from sqlalchemy.sql.elements import ColumnElement

from campus_books.domain.listing import ListingFilters, ListingStatus
from campus_books.domain.search import LIKE_ESCAPE_CHAR, SEARCHABLE_FIELDS, like_pattern
from campus_books.infra.db.models.listing import ListingRow


def active_clause() -> ColumnElement[bool]:
    """Unconditional precondition of every browsing query."""
    return ListingRow.status == ListingStatus.ACTIVE.value


def search_clause(term: str | None) -> ColumnElement[bool] | None:
    """
    Case-insensitive substring match OR-ed across the searchable columns.

    Returns None for a blank term (no search constraint at all).
    """
    pattern = like_pattern(term)
    if pattern is None:
        return None

    columns = [getattr(ListingRow, name) for name in SEARCHABLE_FIELDS]
    return or_(*(column.ilike(pattern, escape=LIKE_ESCAPE_CHAR) for column in columns))


def build_listing_predicate(filters: ListingFilters) -> ColumnElement[bool]:
    """
    Build the conjunctive WHERE predicate for a listing query.

    Absent (None or blank) filters are omitted rather than matched.

    Args:
        filters: Filter criteria (AND semantics)

    Returns:
        SQLAlchemy boolean expression, always including status = 'active'
    """
    clauses: list[ColumnElement[bool]] = [active_clause()]

    search = search_clause(filters.search)
    if search is not None:
        clauses.append(search)

    # Exact matches
    if filters.program_name and filters.program_name.strip():
        clauses.append(ListingRow.program_name == filters.program_name.strip())
    if filters.program_year is not None:
        clauses.append(ListingRow.program_year == filters.program_year)
    if filters.condition_type and filters.condition_type.strip():
        clauses.append(ListingRow.condition_type == filters.condition_type.strip())

    # Price range (inclusive)
    if filters.price_min is not None:
        clauses.append(ListingRow.price >= filters.price_min)
    if filters.price_max is not None:
        clauses.append(ListingRow.price <= filters.price_max)

    return and_(*clauses)
