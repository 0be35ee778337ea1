"""Search bar component."""

from textual.widgets import Input
from textual.message import Message


class SearchBar(Input):
    """Search input.

    Every keystroke is forwarded as ``QueryChanged``; debouncing happens in
    the search controller so the field itself never lags.
    """

    class QueryChanged(Message):
        """Emitted on every edit."""

        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    class Submitted(Message):
        """Emitted when Enter asks for an immediate search."""

        def __init__(self, query: str) -> None:
            self.query = query
            super().__init__()

    def __init__(
        self,
        value: str = "",
        placeholder: str = "Search by title, author, publisher, accession no...",
        id: str | None = None,
    ) -> None:
        super().__init__(value=value, placeholder=placeholder, id=id)

    def on_input_changed(self, event: Input.Changed) -> None:
        """Forward edits to the app."""
        event.stop()
        self.post_message(self.QueryChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter key - immediate search."""
        event.stop()
        self.post_message(self.Submitted(event.value))
