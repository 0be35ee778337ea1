"""Shelfwise CLI - Main Textual Application."""

from pathlib import Path
from typing import Optional

import structlog
from textual.app import App, ComposeResult
from textual.widgets import Header, Footer, ListView, Static
from textual.containers import Container, Horizontal, Vertical
from textual.binding import Binding

from shelfwise_cli.api import ApiClient, Book, book_search_fetcher
from shelfwise_cli.components import (
    BookItem,
    SearchBar,
    ResultsList,
    PaginationBar,
    Sidebar,
    StatusBar,
)
from shelfwise_cli.config import Settings, get_settings
from shelfwise_cli.preferences import load_preferences, save_preferences
from shelfwise_cli.search import SearchController, SearchState

logger = structlog.get_logger(__name__)


class ShelfwiseApp(App):
    """Shelfwise catalogue search."""

    TITLE = "Shelfwise"
    SUB_TITLE = "Search the library catalogue"
    CSS_PATH = Path(__file__).parent / "styles" / "app.tcss"
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("/", "focus_search", "Search", show=True),
        Binding("ctrl+n", "next_page", "Next page", show=True),
        Binding("ctrl+p", "previous_page", "Prev page", show=True),
        Binding("ctrl+r", "refresh", "Refresh", show=True),
        Binding("ctrl+b", "toggle_sidebar", "Details", show=True),
        Binding("ctrl+l", "toggle_collapsed", "Compact details", show=False),
    ]

    def __init__(self, settings: Optional[Settings] = None, api: Optional[ApiClient] = None):
        super().__init__()
        self.settings = settings or get_settings()
        self.api = api or ApiClient.from_settings(self.settings)
        self.preferences = load_preferences(self.settings.preferences_path)
        self.controller: SearchController[Book] = SearchController(
            book_search_fetcher(self.api, self.settings),
            debounce_ms=self.settings.debounce_ms,
            initial_query=self.settings.initial_query,
            window_size=self.settings.window_size,
            min_query_length=self.settings.min_query_length,
            on_change=self._on_search_state,
        )
        self._ui_ready = False
        self._was_loading = False

    def compose(self) -> ComposeResult:
        yield Header()

        with Horizontal(id="main"):
            with Container(id="content"):
                with Vertical(id="search-section"):
                    yield SearchBar(value=self.controller.query, id="search-bar")

                with Vertical(id="results-section"):
                    yield Static("Start searching", id="results-header")
                    yield ResultsList(id="results-list")
                    yield PaginationBar(id="pagination-bar")

            yield Sidebar(id="sidebar")

        yield StatusBar(id="status-bar")
        yield Footer()

    async def on_mount(self) -> None:
        """Open the API client and run the initial search."""
        await self.api.__aenter__()

        sidebar = self.query_one("#sidebar", Sidebar)
        sidebar.is_collapsed = self.preferences.is_collapsed
        sidebar.is_visible = self.preferences.is_open

        status_bar = self.query_one("#status-bar", StatusBar)
        status_bar.is_online = await self.api.health_check()
        logger.info("Server checked", url=self.api.base_url, online=status_bar.is_online)

        self._ui_ready = True
        self.controller.start()
        self.query_one("#search-bar", SearchBar).focus()

    async def on_unmount(self) -> None:
        self._ui_ready = False
        self.controller.close()
        save_preferences(self.preferences, self.settings.preferences_path)
        await self.api.__aexit__(None, None, None)

    # =========================================================================
    # Search state
    # =========================================================================

    def _on_search_state(self, state: SearchState[Book]) -> None:
        """Mirror controller state into the widgets."""
        if not self._ui_ready:
            return

        status_bar = self.query_one("#status-bar", StatusBar)
        status_bar.is_loading = state.is_loading
        status_bar.error = state.error or ""
        status_bar.current_page = state.current_page
        status_bar.total_pages = state.total_pages

        finished = self._was_loading and not state.is_loading
        self._was_loading = state.is_loading
        if state.is_loading:
            return

        if finished and state.total_pages:
            status_bar.set_message(
                f"Found {len(state.results)} books on page {state.current_page + 1}"
            )

        header = self.query_one("#results-header", Static)
        results_list = self.query_one("#results-list", ResultsList)
        if state.error:
            header.update(f"[red]Error:[/] {state.error}")
        elif state.results:
            header.update(
                f"Page [bold]{state.current_page + 1}[/] of "
                f"[bold]{state.total_pages}[/] for [cyan]\"{state.query}\"[/]"
            )
        else:
            header.update(f"[yellow]No books found for[/] \"{state.query}\"")

        if results_list.books is not state.results:
            results_list.first_index = state.current_page * self.settings.page_size + 1
            results_list.books = state.results

        self.query_one("#pagination-bar", PaginationBar).update_pages(
            self.controller.page_window(), state.current_page, state.total_pages
        )

    # =========================================================================
    # Events
    # =========================================================================

    def on_search_bar_query_changed(self, event: SearchBar.QueryChanged) -> None:
        self.controller.set_query(event.query)

    def on_search_bar_submitted(self, event: SearchBar.Submitted) -> None:
        self.run_worker(self.controller.submit(), group="search")

    def on_pagination_bar_page_requested(
        self, event: PaginationBar.PageRequested
    ) -> None:
        self.run_worker(self.controller.change_page(event.page), group="search")

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        if isinstance(event.item, BookItem):
            self.query_one("#sidebar", Sidebar).book = event.item.book

    def on_results_list_book_selected(self, event: ResultsList.BookSelected) -> None:
        sidebar = self.query_one("#sidebar", Sidebar)
        sidebar.book = event.book
        if not self.preferences.is_open:
            self.action_toggle_sidebar()

    # =========================================================================
    # Actions
    # =========================================================================

    def action_focus_search(self) -> None:
        """Focus the search bar."""
        self.query_one("#search-bar", SearchBar).focus()

    def action_next_page(self) -> None:
        self.run_worker(self.controller.next_page(), group="search")

    def action_previous_page(self) -> None:
        self.run_worker(self.controller.previous_page(), group="search")

    def action_refresh(self) -> None:
        """Re-run the current search."""
        self.run_worker(self.controller.refresh(), group="search")

    def action_toggle_sidebar(self) -> None:
        self.preferences.toggle()
        self.query_one("#sidebar", Sidebar).is_visible = self.preferences.is_open

    def action_toggle_collapsed(self) -> None:
        self.preferences.set_collapsed(not self.preferences.is_collapsed)
        self.query_one("#sidebar", Sidebar).is_collapsed = self.preferences.is_collapsed
        save_preferences(self.preferences, self.settings.preferences_path)


def run_app(settings: Optional[Settings] = None):
    """Run the Shelfwise TUI."""
    app = ShelfwiseApp(settings)
    app.run()


if __name__ == "__main__":
    run_app()
