"""Debounced, cancel-on-supersede dispatch of browse queries."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from campus_books.client.api_client import SERVER_ERROR_MESSAGE, ApiError
from campus_books.client.browse_state import BrowseView
from campus_books.client.models import BrowseQuery, ListingsPage
from campus_books.domain.errors import DomainError

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.3

Fetch = Callable[[BrowseQuery], Awaitable[ListingsPage]]


class DebouncedSearch:
    """
    Runs one fetch task per query change.

    A change waits ``delay`` seconds before dispatching; another change in
    that window (or while the fetch is in flight) cancels the pending task.
    The view's sequence numbers cover whatever cancellation misses.
    """

    def __init__(self, view: BrowseView, fetch: Fetch, delay: float = DEBOUNCE_SECONDS) -> None:
        self._view = view
        self._fetch = fetch
        self._delay = delay
        self._pending: asyncio.Task[None] | None = None

    @property
    def pending(self) -> asyncio.Task[None] | None:
        return self._pending

    def on_query_changed(self, **changes: str) -> asyncio.Task[None]:
        """Keystroke/filter handler: update the query (page resets) and debounce."""
        self._view.change_query(**changes)
        return self.schedule()

    def on_page_changed(self, page: int) -> asyncio.Task[None]:
        """Page buttons dispatch straight away."""
        self._view.go_to_page(page)
        return self.schedule(delay=0)

    def schedule(self, delay: float | None = None) -> asyncio.Task[None]:
        self.cancel()
        wait = self._delay if delay is None else delay
        self._pending = asyncio.get_running_loop().create_task(self._run(wait))
        return self._pending

    def cancel(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

    async def wait(self) -> None:
        """Wait for the current task; re-raises its error, ignores cancellation."""
        task = self._pending
        if task is None:
            return
        await asyncio.wait({task})
        if not task.cancelled():
            task.result()

    async def _run(self, delay: float) -> None:
        if delay > 0:
            await asyncio.sleep(delay)

        sequence, query = self._view.begin_fetch()
        try:
            page = await self._fetch(query)
        except (ApiError, DomainError) as exc:
            self._view.fail(sequence, exc.message)
            return
        except Exception:
            logger.exception("Browse fetch failed", extra={"sequence": sequence})
            self._view.fail(sequence, SERVER_ERROR_MESSAGE)
            return

        if not self._view.complete(sequence, page):
            logger.debug("Dropped stale response", extra={"sequence": sequence})
