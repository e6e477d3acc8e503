"""Event entities emitted by the session controller to the UI layer."""

from dataclasses import dataclass
from typing import Optional


class SessionEvent:
    """Base class for session events."""

    pass


@dataclass
class SessionStartedEvent(SessionEvent):
    """Event emitted when a session starts running."""

    exercise_id: str
    duration_total: int


@dataclass
class SessionCompletedEvent(SessionEvent):
    """Event emitted once when a session counts down to zero.

    ``completed_count`` is None when the quota could not be persisted.
    """

    exercise_id: str
    completed_count: Optional[int]
    goal: int
    message: str


@dataclass
class QuotaExhaustedEvent(SessionEvent):
    """Event emitted when today's goal has been reached."""

    completed_count: int
    goal: int
    message: str


@dataclass
class SessionAbortedEvent(SessionEvent):
    """Event emitted when a running session is abandoned."""

    exercise_id: str
    remaining: int


@dataclass
class QuotaWriteFailedEvent(SessionEvent):
    """Event emitted when a completed session could not be counted."""

    exercise_id: str
    error: str
