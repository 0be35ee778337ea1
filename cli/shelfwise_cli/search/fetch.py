"""Fetch coordination with stale-response discarding.

Network responses can resolve out of submission order. Every request is
stamped with a sequence number when issued, and only the response of the
most recently issued request is ever applied; anything older that resolves
later is dropped without touching state.
"""

import itertools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_ERROR_MESSAGE = "An error occurred"


@dataclass
class SearchPage(Generic[T]):
    """One page of results as served by the search endpoint."""

    data: list[T]
    total_pages: int
    current_page: int


@dataclass
class FetchRequest:
    """An issued request, alive for one round trip."""

    seq: int
    query: str
    page: int


@dataclass
class FetchCallbacks(Generic[T]):
    """State transitions the coordinator drives on its owner."""

    on_start: Callable[[FetchRequest], None]
    on_success: Callable[[FetchRequest, SearchPage[T]], None]
    on_failure: Callable[[FetchRequest, str], None]


FetchFn = Callable[[str, int], Awaitable[SearchPage[Any]]]


def error_message(exc: BaseException) -> str:
    """Turn a fetch failure into text suitable for display."""
    message = str(exc).strip()
    return message or DEFAULT_ERROR_MESSAGE


class FetchCoordinator(Generic[T]):
    """Issue fetches and apply only the freshest response."""

    def __init__(self, fetch_fn: FetchFn, callbacks: FetchCallbacks[T]) -> None:
        self.fetch_fn = fetch_fn
        self.callbacks = callbacks
        self._counter = itertools.count(1)
        self._latest_issued = 0
        self._in_flight = 0

    @property
    def latest_issued(self) -> int:
        return self._latest_issued

    @property
    def in_flight(self) -> int:
        """Requests still on the wire, superseded ones included."""
        return self._in_flight

    def invalidate(self) -> None:
        """Treat every request issued so far as superseded."""
        self._latest_issued = next(self._counter)
        logger.debug("Requests invalidated", latest=self._latest_issued)

    def is_current(self, request: FetchRequest) -> bool:
        return request.seq == self._latest_issued

    async def fetch(self, query: str, page: int) -> Optional[SearchPage[T]]:
        """Fetch ``page`` of ``query``.

        Returns the page when it was applied, ``None`` when the request
        failed or was superseded. Never raises for fetch failures.
        """
        request = FetchRequest(seq=next(self._counter), query=query, page=page)
        self._latest_issued = request.seq
        self.callbacks.on_start(request)
        logger.debug("Fetch issued", seq=request.seq, query=query, page=page)

        self._in_flight += 1
        try:
            result = await self.fetch_fn(query, page)
        except Exception as e:
            if not self.is_current(request):
                logger.debug("Discarding superseded failure", seq=request.seq)
                return None
            message = error_message(e)
            logger.warning(
                "Fetch failed", seq=request.seq, query=query, page=page, error=message
            )
            self.callbacks.on_failure(request, message)
            return None
        finally:
            self._in_flight -= 1

        if not self.is_current(request):
            logger.debug(
                "Discarding superseded result",
                seq=request.seq,
                latest=self._latest_issued,
            )
            return None

        logger.debug(
            "Fetch applied",
            seq=request.seq,
            items=len(result.data),
            total_pages=result.total_pages,
            served_page=result.current_page,
        )
        self.callbacks.on_success(request, result)
        return result
