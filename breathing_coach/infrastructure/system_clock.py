"""System wall-clock implementation of the Clock protocol."""

from datetime import datetime

from ..domain.interfaces.clock import Clock


class SystemClock(Clock):
    """Clock reading the local system time."""

    def now(self) -> datetime:
        return datetime.now()
