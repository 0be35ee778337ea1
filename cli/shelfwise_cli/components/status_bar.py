"""Status bar component."""

from textual.widgets import Static
from textual.reactive import reactive


class StatusBar(Static):
    """Status bar showing server connection and search status."""

    is_online: reactive[bool] = reactive(False)
    is_loading: reactive[bool] = reactive(False)
    error: reactive[str] = reactive("")
    current_page: reactive[int] = reactive(0)
    total_pages: reactive[int] = reactive(0)
    message: reactive[str] = reactive("")

    def render(self) -> str:
        parts = []

        # Connection status
        if self.is_online:
            parts.append("[green]● Online[/]")
        else:
            parts.append("[red]● Offline[/]")

        # Search status
        if self.is_loading:
            parts.append("[yellow]⟳ Searching...[/]")
        elif self.error:
            parts.append(f"[red]✗ {self.error}[/] [dim](ctrl+r to retry)[/]")
        elif self.total_pages:
            parts.append(f"[dim]Page {self.current_page + 1} of {self.total_pages}[/]")

        # Custom message
        if self.message:
            parts.append(f"[cyan]{self.message}[/]")

        return " │ ".join(parts)

    def set_message(self, message: str, duration: float = 3.0) -> None:
        """Show a temporary message."""
        self.message = message
        if duration > 0:
            self.set_timer(duration, lambda: self._clear_message())

    def _clear_message(self) -> None:
        self.message = ""
