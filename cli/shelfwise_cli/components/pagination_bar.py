"""Pagination bar component."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widgets import Button, Static

from shelfwise_cli.search import PageMarker, is_ellipsis


def format_page_strip(markers: list[PageMarker], current_page: int) -> str:
    """Render page markers as Rich markup, one-based, current page highlighted."""
    parts = []
    for marker in markers:
        if is_ellipsis(marker):
            parts.append("[dim]…[/]")
        elif marker == current_page:
            parts.append(f"[reverse bold] {marker + 1} [/]")
        else:
            parts.append(f" {marker + 1} ")
    return " ".join(parts)


class PaginationBar(Horizontal):
    """Previous/next buttons around a compact strip of page buttons."""

    class PageRequested(Message):
        """Emitted when the user picks a page."""

        def __init__(self, page: int) -> None:
            self.page = page
            super().__init__()

    def __init__(self, id: str | None = None) -> None:
        super().__init__(id=id)
        self.current_page = 0
        self.total_pages = 0
        self.markers: list[PageMarker] = []

    def compose(self) -> ComposeResult:
        yield Button("‹ Prev", id="page-prev", disabled=True)
        yield Horizontal(id="page-strip")
        yield Button("Next ›", id="page-next", disabled=True)

    def on_mount(self) -> None:
        self.display = False

    def update_pages(
        self, markers: list[PageMarker], current_page: int, total_pages: int
    ) -> None:
        """Rebuild the strip if anything changed."""
        if (
            markers == self.markers
            and current_page == self.current_page
            and total_pages == self.total_pages
        ):
            return

        self.markers = list(markers)
        self.current_page = current_page
        self.total_pages = total_pages

        self.query_one("#page-prev", Button).disabled = current_page <= 0
        self.query_one("#page-next", Button).disabled = current_page >= total_pages - 1

        strip = self.query_one("#page-strip", Horizontal)
        strip.remove_children()
        widgets = []
        for marker in self.markers:
            if is_ellipsis(marker):
                widgets.append(Static("…", classes="page-ellipsis"))
            else:
                button = Button(
                    str(marker + 1),
                    name=str(marker),
                    classes="page-button",
                    variant="primary" if marker == current_page else "default",
                )
                widgets.append(button)
        if widgets:
            strip.mount(*widgets)
        self.display = total_pages > 1

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        button_id = event.button.id
        if button_id == "page-prev":
            page = self.current_page - 1
        elif button_id == "page-next":
            page = self.current_page + 1
        elif event.button.name is not None:
            page = int(event.button.name)
        else:
            return

        if 0 <= page < self.total_pages and page != self.current_page:
            self.post_message(self.PageRequested(page))
