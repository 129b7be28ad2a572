"""State machine behind the browse screen.

    LOADING --success--> RESULTS | EMPTY | NO_RESULTS
    LOADING --failure--> ERROR
    any     --fetch----> LOADING

Every fetch gets a sequence number. Only the response to the most recent
fetch is applied; anything older is stale and dropped.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum

from campus_books.client.models import BrowseQuery, ListingsPage

logger = logging.getLogger(__name__)


class ViewState(str, Enum):
    LOADING = "loading"
    RESULTS = "results"
    EMPTY = "empty"  # Nothing listed at all
    NO_RESULTS = "no_results"  # Nothing matches the search/filters
    ERROR = "error"


class BrowseView:
    def __init__(self, query: BrowseQuery | None = None) -> None:
        self.query = query or BrowseQuery()
        self.state = ViewState.LOADING
        self.result: ListingsPage | None = None
        self.error: str | None = None
        self._sequence = 0

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    @property
    def show_pagination(self) -> bool:
        return (
            self.state == ViewState.RESULTS
            and self.result is not None
            and self.result.total_pages > 1
        )

    def change_query(self, **changes: str) -> bool:
        """Apply search/filter edits; returns whether anything changed."""
        updated = self.query.with_changes(**changes)
        changed = updated != self.query
        self.query = updated
        return changed

    def go_to_page(self, page: int) -> None:
        self.query = self.query.with_page(page)

    def begin_fetch(self) -> tuple[int, BrowseQuery]:
        """Enter LOADING and return the sequence number and query to send."""
        self._sequence += 1
        self.state = ViewState.LOADING
        self.error = None
        return self._sequence, self.query

    def complete(self, sequence: int, page: ListingsPage) -> bool:
        """
        Apply a successful response.

        Returns:
            False if the response is stale and was discarded
        """
        if sequence != self._sequence:
            logger.debug(
                "Discarding stale listings response",
                extra={"sequence": sequence, "latest": self._sequence},
            )
            return False

        self.result = page
        self.error = None
        if page.total > 0:
            self.state = ViewState.RESULTS
        elif self.query.has_criteria:
            self.state = ViewState.NO_RESULTS
        else:
            self.state = ViewState.EMPTY

        # The server clamps out-of-range pages; follow it
        self.query = replace(self.query, page=page.page)
        return True

    def fail(self, sequence: int, message: str) -> bool:
        """
        Apply a failed fetch.

        Returns:
            False if the failure belongs to a superseded fetch
        """
        if sequence != self._sequence:
            return False

        self.state = ViewState.ERROR
        self.error = message
        return True
