"""Time source and periodic tick interfaces."""

from datetime import datetime
from typing import Any, Awaitable, Callable, Protocol, Union, runtime_checkable

TickCallback = Callable[[], Union[Awaitable[Any], Any]]


@runtime_checkable
class Clock(Protocol):
    """Protocol for the wall-clock source.

    The core never reads the system time directly; every time-dependent
    decision goes through a Clock so it can be substituted in tests.
    """

    def now(self) -> datetime:
        """Return the current local date and time."""
        ...


@runtime_checkable
class CancellationHandle(Protocol):
    """Handle returned by ``Ticker.schedule``."""

    def cancel(self) -> None:
        """Stop future deliveries.

        Safe to call more than once, after the subscription expired, or
        from inside the callback currently being delivered.
        """
        ...

    @property
    def active(self) -> bool:
        """Whether the subscription still delivers callbacks."""
        ...


@runtime_checkable
class Ticker(Protocol):
    """Protocol for a cancellable periodic tick source."""

    def schedule(self, interval_seconds: float, callback: TickCallback) -> CancellationHandle:
        """Deliver ``callback`` once per interval until cancelled.

        Args:
            interval_seconds: Seconds between deliveries.
            callback: Plain or coroutine function called with no arguments.

        Returns:
            CancellationHandle: Handle that stops the subscription.
        """
        ...
