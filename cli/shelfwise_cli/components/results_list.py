"""Results list component."""

from textual.widgets import Static, ListItem, ListView
from textual.reactive import reactive
from textual.message import Message
from rich.text import Text

from shelfwise_cli.api import Book


# Book status styles
STATUS_STYLES = {
    "AVAILABLE": "green",
    "ISSUED": "yellow",
    "LOST": "red",
    "DAMAGED": "red",
    "UNDER_REPAIR": "magenta",
    "UNAVAILABLE": "dim",
}


def status_text(book: Book) -> Text:
    """Render a book's status badge."""
    style = STATUS_STYLES.get(book.book_status, "")
    return Text(book.book_status.replace("_", " ").title(), style=style)


class BookItem(ListItem):
    """Single book row."""

    def __init__(self, book: Book, index: int) -> None:
        super().__init__()
        self.book = book
        self.index = index

    def compose(self):
        title_text = Text()
        title_text.append(f"[{self.index}] ", style="dim")
        title_text.append(self.book.accession_number, style="cyan")
        title_text.append("  ")
        title_text.append(self.book.title, style="bold")
        title_text.append("  ")
        title_text.append_text(status_text(self.book))

        yield Static(title_text, classes="result-title")

        meta_parts = []
        if self.book.authors:
            meta_parts.append(self.book.authors)
        if self.book.publisher:
            meta_parts.append(self.book.publisher)
        if self.book.publication_year:
            meta_parts.append(str(self.book.publication_year))
        meta_parts.append(
            f"{self.book.available_copies}/{self.book.total_copies} available"
        )

        yield Static(
            "    " + " • ".join(meta_parts),
            classes="result-meta",
        )


class ResultsList(ListView):
    """List of books with keyboard navigation."""

    books: reactive[list[Book]] = reactive([], always_update=True)

    class BookSelected(Message):
        """Emitted when a book is selected."""

        def __init__(self, book: Book) -> None:
            self.book = book
            super().__init__()

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id=id)
        self.first_index = 1

    def watch_books(self, books: list[Book]) -> None:
        """Update list when books change."""
        self.clear()
        for i, book in enumerate(books, self.first_index):
            self.append(BookItem(book, i))

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Handle book selection."""
        if isinstance(event.item, BookItem):
            self.post_message(self.BookSelected(event.item.book))
