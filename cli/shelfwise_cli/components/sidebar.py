"""Book detail sidebar."""

from typing import Optional

from textual.containers import VerticalScroll
from textual.reactive import reactive
from textual.widgets import Static
from rich.table import Table
from rich.text import Text

from shelfwise_cli.api import Book
from shelfwise_cli.components.results_list import status_text


class Sidebar(VerticalScroll):
    """Details of the highlighted book.

    Collapsed, it shows only the title and status.
    """

    is_visible: reactive[bool] = reactive(False)
    is_collapsed: reactive[bool] = reactive(False)
    book: reactive[Optional[Book]] = reactive(None)

    def compose(self):
        yield Static("[dim]Select a book to see its details[/]", id="sidebar-body")

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = self.is_visible

    def watch_is_visible(self, visible: bool) -> None:
        self.display = visible

    def watch_is_collapsed(self, collapsed: bool) -> None:
        self.set_class(collapsed, "collapsed")
        self._refresh_body()

    def watch_book(self, book: Optional[Book]) -> None:
        self._refresh_body()

    def _refresh_body(self) -> None:
        if not self.is_mounted:
            return
        body = self.query_one("#sidebar-body", Static)
        if self.book is None:
            body.update("[dim]Select a book to see its details[/]")
            return

        book = self.book
        title = Text(book.title, style="bold")
        if book.subtitle and not self.is_collapsed:
            title.append(f"\n{book.subtitle}", style="italic")
        title.append("\n")
        title.append_text(status_text(book))

        if self.is_collapsed:
            body.update(title)
            return

        table = Table.grid(padding=(0, 1))
        table.add_column(style="dim", no_wrap=True)
        table.add_column()
        rows = [
            ("Accession", book.accession_number),
            ("ISBN", book.isbn),
            ("Authors", book.authors),
            ("Publisher", book.publisher),
            ("Year", str(book.publication_year) if book.publication_year else None),
            ("Language", book.language),
            ("Class no.", book.classification_number),
            ("Location", book.location),
            ("Condition", book.book_condition),
            ("Copies", f"{book.available_copies}/{book.total_copies} available"),
        ]
        for label, value in rows:
            if value:
                table.add_row(label, value)
        if book.is_reference_only:
            table.add_row("", Text("Reference only", style="yellow"))

        grid = Table.grid()
        grid.add_row(title)
        grid.add_row("")
        grid.add_row(table)
        body.update(grid)
