from campus_books.infra.db.models.base import Base
from campus_books.infra.db.models.listing import ListingRow
from campus_books.infra.db.models.user import UserRow

__all__ = ["Base", "ListingRow", "UserRow"]
