"""
Shelfwise Test Fixtures

Shared pytest fixtures and fake search endpoints.
"""

import asyncio

import pytest

from shelfwise_cli.config import Settings
from shelfwise_cli.search import SearchPage


async def settle(rounds: int = 5) -> None:
    """Let freshly created tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


class GatedFetcher:
    """Fake search endpoint whose responses resolve only when released.

    Each call waits on its own event, so tests decide the completion order.
    """

    def __init__(self, total_pages: int = 5):
        self.total_pages = total_pages
        self.calls: list[tuple[str, int]] = []
        self.failures: dict[tuple[str, int], Exception] = {}
        self._gates: dict[tuple[str, int], asyncio.Event] = {}

    async def __call__(self, query: str, page: int) -> SearchPage[str]:
        key = (query, page)
        self.calls.append(key)
        gate = asyncio.Event()
        self._gates[key] = gate
        await gate.wait()
        if key in self.failures:
            raise self.failures[key]
        return SearchPage(
            data=[f"{query}:{page}"],
            total_pages=self.total_pages,
            current_page=page,
        )

    def release(self, query: str, page: int = 0) -> None:
        self._gates[(query, page)].set()


class InstantFetcher:
    """Fake search endpoint that answers immediately."""

    def __init__(self, total_pages: int = 5):
        self.total_pages = total_pages
        self.calls: list[tuple[str, int]] = []
        self.fail_with: Exception | None = None

    async def __call__(self, query: str, page: int) -> SearchPage[str]:
        self.calls.append((query, page))
        if self.fail_with is not None:
            raise self.fail_with
        return SearchPage(
            data=[f"{query}:{page}:{i}" for i in range(3)],
            total_pages=self.total_pages,
            current_page=page,
        )


@pytest.fixture
def gated_fetcher():
    return GatedFetcher()


@pytest.fixture
def instant_fetcher():
    return InstantFetcher()


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the user's environment and home directory."""
    return Settings(_env_file=None, data_dir=tmp_path / "shelfwise")
