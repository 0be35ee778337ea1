"""Incremental search and pagination."""

from shelfwise_cli.search.controller import SearchController, SearchState
from shelfwise_cli.search.debounce import DebounceScheduler
from shelfwise_cli.search.fetch import (
    FetchCallbacks,
    FetchCoordinator,
    FetchRequest,
    SearchPage,
)
from shelfwise_cli.search.pagination import ELLIPSIS, PageMarker, is_ellipsis, page_window

__all__ = [
    "SearchController",
    "SearchState",
    "DebounceScheduler",
    "FetchCallbacks",
    "FetchCoordinator",
    "FetchRequest",
    "SearchPage",
    "ELLIPSIS",
    "PageMarker",
    "is_ellipsis",
    "page_window",
]
