"""
Trailing-edge debounce for async callbacks, used for search-as-you-type.
"""

from typing import Any, Awaitable, Callable, Optional
import asyncio
import logging

from app.config import settings

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Run `callback` once calls have stopped for `delay` seconds.

    Each `call` cancels the pending run and schedules a new one with the latest
    arguments. Must be used from within a running event loop.
    """

    def __init__(
        self,
        callback: Callable[..., Awaitable[Any]],
        delay: Optional[float] = None
    ):
        self.callback = callback
        self.delay = settings.search_debounce_seconds if delay is None else delay
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def call(self, *args, **kwargs) -> asyncio.Task:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(args, kwargs))
        return self._task

    def cancel(self) -> None:
        if self.pending:
            self._task.cancel()
        self._task = None

    async def _run(self, args, kwargs) -> None:
        await asyncio.sleep(self.delay)
        try:
            await self.callback(*args, **kwargs)
        except Exception:
            logger.exception("Debounced callback failed")
