"""CLI components."""

from .search_bar import SearchBar
from .results_list import ResultsList, BookItem
from .pagination_bar import PaginationBar, format_page_strip
from .sidebar import Sidebar
from .status_bar import StatusBar

__all__ = [
    "SearchBar",
    "ResultsList",
    "BookItem",
    "PaginationBar",
    "format_page_strip",
    "Sidebar",
    "StatusBar",
]
