"""Debounced scheduling on the asyncio event loop."""

import asyncio
import inspect
from typing import Any, Callable, Optional

import structlog

logger = structlog.get_logger(__name__)


class DebounceScheduler:
    """Run the most recently scheduled action after a quiet interval.

    Each ``schedule`` call restarts the timer and drops whatever was pending,
    so a burst of calls results in a single invocation of the last action.
    Actions returning an awaitable are run as tasks on the same loop.
    """

    def __init__(
        self,
        delay_ms: float,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.delay_ms = delay_ms
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks: set[asyncio.Task] = set()
        self._disposed = False

    @property
    def pending(self) -> bool:
        """Whether an action is waiting for its deadline."""
        return self._handle is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def schedule(self, action: Callable[[], Any]) -> None:
        """Arm the timer for ``action``, replacing any pending action."""
        if self._disposed:
            logger.debug("Ignoring schedule on disposed debouncer")
            return

        self.cancel()

        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay_ms / 1000, self._fire, action)

    def cancel(self) -> None:
        """Drop the pending action, if any, without disposing."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def dispose(self) -> None:
        """Cancel the pending action and refuse any further scheduling."""
        self.cancel()
        self._disposed = True

    def _fire(self, action: Callable[[], Any]) -> None:
        self._handle = None
        if self._disposed:
            return

        result = action()
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced action failed", exc_info=exc)
