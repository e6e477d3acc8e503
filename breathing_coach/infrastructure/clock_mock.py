"""Deterministic clock and ticker for tests and offline previews."""
import inspect
import logging
from datetime import datetime, timedelta
from typing import Optional

from ..domain.interfaces.clock import CancellationHandle, Clock, TickCallback, Ticker

logger = logging.getLogger(__name__)


class FakeClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, now: Optional[datetime] = None):
        self._now = now or datetime(2024, 1, 1, 9, 0, 0)

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, delta: timedelta) -> None:
        self._now += delta


class ManualCancellationHandle(CancellationHandle):
    """Handle for a ManualTicker subscription."""

    def __init__(self, interval_seconds: float, callback: TickCallback):
        self.interval_seconds = interval_seconds
        self.callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False


class ManualTicker(Ticker):
    """Ticker whose ticks are delivered explicitly with ``advance``."""

    def __init__(self):
        self._handles: list[ManualCancellationHandle] = []
        self.schedule_count = 0
        self.last_handle: Optional[ManualCancellationHandle] = None

    def schedule(self, interval_seconds: float, callback: TickCallback) -> ManualCancellationHandle:
        handle = ManualCancellationHandle(interval_seconds, callback)
        self._handles.append(handle)
        self.schedule_count += 1
        self.last_handle = handle
        return handle

    @property
    def active_subscriptions(self) -> int:
        return sum(1 for handle in self._handles if handle.active)

    async def advance(self, ticks: int = 1) -> None:
        """Deliver ``ticks`` ticks to every active subscription.

        Exceptions raised by a callback propagate to the caller.
        """
        for _ in range(ticks):
            self._handles = [handle for handle in self._handles if handle.active]
            for handle in list(self._handles):
                if not handle.active:
                    continue
                result = handle.callback()
                if inspect.isawaitable(result):
                    await result
        logger.debug(f"Delivered {ticks} manual ticks")

    async def fire_stale(self, handle: ManualCancellationHandle) -> None:
        """Invoke a callback even if its subscription was cancelled.

        Simulates a timer callback that was already queued when cancelled.
        """
        result = handle.callback()
        if inspect.isawaitable(result):
            await result
