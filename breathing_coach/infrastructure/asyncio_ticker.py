"""Event-loop driven implementation of the Ticker protocol."""

import asyncio
import inspect
import logging
from typing import Optional

from ..domain.interfaces.clock import CancellationHandle, TickCallback, Ticker

logger = logging.getLogger(__name__)


class AsyncioCancellationHandle(CancellationHandle):
    """Cancellation handle backed by an asyncio task."""

    def __init__(self):
        self._task: Optional[asyncio.Task] = None
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False

        # The task delivering the current tick stops at its next loop check
        # instead of being interrupted mid-callback.
        task = self._task
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()


class AsyncioTicker(Ticker):
    """Delivers callbacks from a background task on the running event loop.

    Deliveries follow a fixed deadline schedule, so a slow callback does not
    push every later tick back.
    """

    def schedule(self, interval_seconds: float, callback: TickCallback) -> AsyncioCancellationHandle:
        """Start a periodic subscription.

        Args:
            interval_seconds: Seconds between deliveries.
            callback: Plain or coroutine function called with no arguments.

        Returns:
            AsyncioCancellationHandle: Handle that stops the subscription.
        """
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        handle = AsyncioCancellationHandle()
        loop = asyncio.get_running_loop()
        handle._task = loop.create_task(self._run(interval_seconds, callback, handle))
        return handle

    async def _run(
        self,
        interval_seconds: float,
        callback: TickCallback,
        handle: AsyncioCancellationHandle,
    ) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        try:
            while handle.active:
                deadline += interval_seconds
                await asyncio.sleep(max(0.0, deadline - loop.time()))
                if not handle.active:
                    break
                try:
                    result = callback()
                    if inspect.isawaitable(result):
                        await result
                except Exception as e:
                    logger.error(f"Error in tick callback: {e}", exc_info=True)
        except asyncio.CancelledError:
            logger.debug("Tick subscription cancelled")
        finally:
            handle._active = False
