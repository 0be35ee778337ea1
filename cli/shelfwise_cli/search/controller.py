"""Incremental search controller.

Keystrokes go through the debouncer; page changes and refreshes go straight
to the fetch coordinator. State is replaced wholesale whenever a response is
applied.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Callable, Generic, Optional, TypeVar

import structlog

from shelfwise_cli.search.debounce import DebounceScheduler
from shelfwise_cli.search.fetch import (
    FetchCallbacks,
    FetchCoordinator,
    FetchFn,
    FetchRequest,
    SearchPage,
)
from shelfwise_cli.search.pagination import PageMarker, page_window

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass
class SearchState(Generic[T]):
    """Everything the presentation layer reads."""

    query: str = ""
    current_page: int = 0
    total_pages: int = 0
    results: list[T] = field(default_factory=list)
    is_loading: bool = False
    error: Optional[str] = None


class SearchController(Generic[T]):
    """Owns search state and routes user actions to fetches."""

    def __init__(
        self,
        fetch_fn: FetchFn,
        debounce_ms: float = 500,
        initial_query: str = "",
        window_size: int = 2,
        min_query_length: int = 0,
        on_change: Optional[Callable[["SearchState[T]"], None]] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self._state: SearchState[T] = SearchState(query=initial_query)
        self.window_size = window_size
        self.min_query_length = min_query_length
        self.on_change = on_change
        self._applied = False
        self._debouncer = DebounceScheduler(debounce_ms, loop=loop)
        self._coordinator: FetchCoordinator[T] = FetchCoordinator(
            fetch_fn,
            FetchCallbacks(
                on_start=self._on_fetch_start,
                on_success=self._on_fetch_success,
                on_failure=self._on_fetch_failure,
            ),
        )

    @property
    def state(self) -> SearchState[T]:
        return self._state

    @property
    def query(self) -> str:
        return self._state.query

    @property
    def search_pending(self) -> bool:
        """Whether a keystroke-triggered search is waiting to fire."""
        return self._debouncer.pending

    # =========================================================================
    # User actions
    # =========================================================================

    def start(self) -> None:
        """Schedule the first search for the initial query."""
        self.set_query(self._state.query)

    def set_query(self, text: str) -> None:
        """Update the query now and search for it once typing settles."""
        self._state.query = text
        self._notify()

        if len(text) < self.min_query_length:
            logger.debug("Query below minimum length", length=len(text))
            self._debouncer.cancel()
            self._clear_results()
            return

        # Captured here so the deferred search uses this exact text
        self._debouncer.schedule(lambda: self._coordinator.fetch(text, 0))

    async def submit(self) -> Optional[SearchPage[T]]:
        """Search for the current query immediately, skipping the debounce."""
        self._debouncer.cancel()
        return await self._coordinator.fetch(self._state.query, 0)

    async def change_page(self, page: int) -> Optional[SearchPage[T]]:
        """Fetch ``page`` of the current query immediately."""
        return await self._coordinator.fetch(self._state.query, max(0, page))

    async def next_page(self) -> Optional[SearchPage[T]]:
        if self._state.current_page + 1 >= self._state.total_pages:
            return None
        return await self.change_page(self._state.current_page + 1)

    async def previous_page(self) -> Optional[SearchPage[T]]:
        if self._state.current_page <= 0:
            return None
        return await self.change_page(self._state.current_page - 1)

    async def refresh(self) -> Optional[SearchPage[T]]:
        """Re-fetch the current query and page."""
        return await self._coordinator.fetch(
            self._state.query, self._state.current_page
        )

    def page_window(self) -> list[PageMarker]:
        return page_window(
            self._state.current_page, self._state.total_pages, self.window_size
        )

    def close(self) -> None:
        """Stop any pending keystroke search for good."""
        self._debouncer.dispose()

    # =========================================================================
    # Fetch transitions
    # =========================================================================

    def _on_fetch_start(self, request: FetchRequest) -> None:
        self._state.is_loading = True
        self._state.error = None
        if not self._applied:
            self._state.current_page = request.page
        self._notify()

    def _on_fetch_success(self, request: FetchRequest, result: SearchPage[T]) -> None:
        self._applied = True
        self._state.results = list(result.data)
        self._state.total_pages = result.total_pages
        self._state.current_page = result.current_page
        self._state.error = None
        self._state.is_loading = False
        self._notify()

    def _on_fetch_failure(self, request: FetchRequest, message: str) -> None:
        # Retrying with refresh() should hit the page that failed
        self._applied = True
        self._state.current_page = request.page
        self._state.error = message
        self._state.results = []
        self._state.total_pages = 0
        self._state.is_loading = False
        self._notify()

    def _clear_results(self) -> None:
        # In-flight responses belong to a query that is no longer shown
        self._coordinator.invalidate()
        self._state.results = []
        self._state.total_pages = 0
        self._state.current_page = 0
        self._state.error = None
        self._state.is_loading = False
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self._state)
