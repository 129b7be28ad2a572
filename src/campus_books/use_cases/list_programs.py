from __future__ import annotations

from campus_books.ports.listing_repository import ListingRepository


class ListPrograms:
    """Program names offered as filter choices (active listings only)."""

    def __init__(self, listing_repository: ListingRepository) -> None:
        self._repository = listing_repository

    def execute(self) -> list[str]:
        return self._repository.list_distinct_programs()
