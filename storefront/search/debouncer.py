"""
Debounce keystroke-driven searches.

Only the most recent query survives a burst of typing: every new query
cancels the armed timer and starts a fresh one, and the callback runs once
the input has been quiet for ``delay_ms``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)

SearchCallback = Callable[[str], Awaitable[None]]

DEFAULT_DELAY_MS = 500


class SearchDebouncer:
    """
    Two states: idle, and pending(timer, query).

    Must be used from inside a running event loop. Callbacks that already
    started are never cancelled by a newer query; only the armed timer is.
    """

    def __init__(self, callback: SearchCallback, delay_ms: int = DEFAULT_DELAY_MS):
        """
        Args:
            callback: Coroutine function invoked with the settled query
            delay_ms: Quiet period before the callback fires
        """
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        self.callback = callback
        self.delay_ms = delay_ms
        self._timer: Optional[asyncio.Task] = None
        self._pending_query: Optional[str] = None
        self._running: Set[asyncio.Task] = set()

    @property
    def is_pending(self) -> bool:
        return self._timer is not None

    @property
    def pending_query(self) -> Optional[str]:
        return self._pending_query

    def submit(self, query: str) -> None:
        """Arm the timer for ``query``, discarding any query still waiting."""
        if self._timer is not None:
            logger.debug("Superseding pending search: %r -> %r", self._pending_query, query)
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._pending_query = query
        self._timer = loop.create_task(self._fire_after_delay(query))

    def cancel(self) -> None:
        """Disarm the timer without firing. Safe to call when idle."""
        if self._timer is not None:
            self._timer.cancel()
            logger.debug("Cancelled pending search: %r", self._pending_query)
        self._timer = None
        self._pending_query = None

    async def flush(self) -> None:
        """Fire the pending query now instead of waiting for the timer."""
        if self._timer is None:
            return
        query = self._pending_query
        self.cancel()
        await self._invoke(query)

    async def join(self) -> None:
        """Wait until the timer has fired and every started callback finished."""
        while True:
            pending = [t for t in (self._timer, *self._running) if t is not None and not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    async def _fire_after_delay(self, query: str) -> None:
        await asyncio.sleep(self.delay_ms / 1000)
        task = asyncio.current_task()
        if self._timer is task:
            self._timer = None
            self._pending_query = None
        if task is not None:
            self._running.add(task)
            task.add_done_callback(self._running.discard)
        await self._invoke(query)

    async def _invoke(self, query: str) -> None:
        logger.debug("Debounced search firing: %r", query)
        try:
            await self.callback(query)
        except Exception:
            logger.exception("Search callback failed for query %r", query)
