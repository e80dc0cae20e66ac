"""Debounced async callbacks for autocomplete input."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Runs only the last call scheduled within ``delay`` seconds.

    Every ``trigger`` cancels the pending call before scheduling a new one.
    Must be used from inside a running event loop.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._pending: Optional[asyncio.Task] = None

    def cancel(self) -> None:
        if self._pending and not self._pending.done():
            self._pending.cancel()
        self._pending = None

    def trigger(
        self,
        func: Callable[..., Awaitable[Any]],
        *args: Any,
    ) -> asyncio.Task:
        """Schedule ``func(*args)`` after the delay, replacing any pending call."""
        self.cancel()
        self._pending = asyncio.create_task(self._run(func, *args))
        return self._pending

    async def _run(self, func: Callable[..., Awaitable[Any]], *args: Any) -> Any:
        await asyncio.sleep(self.delay)
        try:
            return await func(*args)
        except Exception as e:
            logger.error(f"Debounced call failed: {e}")
            return None
