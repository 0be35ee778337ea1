"""Shelfwise CLI - Entry Point."""

import asyncio
import sys

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from shelfwise_cli.api import ApiClient, ApiError
from shelfwise_cli.config import get_settings
from shelfwise_cli.log import configure_logging
from shelfwise_cli.search import page_window

console = Console()


@click.group(invoke_without_command=True)
@click.option("--api-url", default=None, help="Shelfwise API base URL")
@click.pass_context
def main(ctx, api_url):
    """Shelfwise - Search the library catalogue from the terminal.

    Run without arguments to launch the interactive TUI.
    """
    settings = get_settings()
    if api_url:
        settings = settings.model_copy(update={"api_base_url": api_url})
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        _launch_tui(settings)


def _launch_tui(settings):
    configure_logging(settings.log_level, log_file=settings.data_dir / "shelfwise.log")
    from shelfwise_cli.app import run_app
    run_app(settings)


@main.command()
@click.pass_obj
def tui(settings):
    """Launch interactive TUI."""
    _launch_tui(settings)


@main.command()
@click.argument("query")
@click.option("-p", "--page", default=1, type=click.IntRange(min=1), help="Page to show (1-based)")
@click.option("-n", "--size", default=None, type=click.IntRange(1, 100), help="Books per page")
@click.pass_obj
def search(settings, query: str, page: int, size):
    """Search for books.

    Example: shelfwise search "tagore"
    """
    configure_logging(settings.log_level)
    size = size or settings.page_size

    async def _search():
        async with ApiClient.from_settings(settings) as api:
            try:
                result = await api.search_books(
                    query,
                    page=page - 1,
                    size=size,
                    sort_by=settings.sort_by,
                    sort_dir=settings.sort_dir,
                )
            except ApiError as e:
                console.print(f"[red]Error:[/] {e}")
                sys.exit(1)

            if not result.books:
                console.print(f"[yellow]No books found for:[/] {query}")
                return

            table = Table(
                title=f"{result.total_elements} books for \"{query}\"",
            )
            table.add_column("#", style="dim", justify="right")
            table.add_column("Accession", style="cyan")
            table.add_column("Title", style="bold")
            table.add_column("Author")
            table.add_column("Publisher")
            table.add_column("Status")
            table.add_column("Copies", justify="right")

            start = result.current_page * result.page_size + 1
            for i, book in enumerate(result.books, start):
                table.add_row(
                    str(i),
                    book.accession_number,
                    book.title,
                    book.authors or "-",
                    book.publisher or "-",
                    book.book_status.replace("_", " ").title(),
                    f"{book.available_copies}/{book.total_copies}",
                )

            console.print()
            console.print(table)

            if result.total_pages > 1:
                from shelfwise_cli.components.pagination_bar import format_page_strip

                markers = page_window(
                    result.current_page, result.total_pages, settings.window_size
                )
                console.print(
                    f"Page {result.current_page + 1} of {result.total_pages}:  "
                    + format_page_strip(markers, result.current_page)
                )

    asyncio.run(_search())


@main.command()
@click.pass_obj
def status(settings):
    """Show server status."""
    configure_logging(settings.log_level)

    async def _status():
        async with ApiClient.from_settings(settings) as api:
            is_online = await api.health_check()

            if not is_online:
                console.print(Panel(
                    "[red]● Server Offline[/]\n\n"
                    f"Could not reach {settings.api_base_url}",
                    title="Shelfwise",
                ))
                sys.exit(1)

            console.print(f"[green]● Server Online[/] {settings.api_base_url}")

    asyncio.run(_status())


if __name__ == "__main__":
    main()
