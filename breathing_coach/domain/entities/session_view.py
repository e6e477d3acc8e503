"""Read model handed to the presentation layer."""

from typing import Optional

from pydantic import BaseModel, Field

from .breathing_session import SessionStatus
from .exercise import BreathingPhase, Exercise


def format_remaining(seconds: int) -> str:
    """Render a number of seconds as ``minutes:seconds``.

    Args:
        seconds: Non-negative number of seconds.

    Returns:
        The time with zero-padded seconds, e.g. 65 -> "1:05".
    """
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


class SessionView(BaseModel):
    """Snapshot of the controller state for rendering."""

    status: SessionStatus
    remaining_seconds: int = Field(ge=0)
    remaining_formatted: str
    exercise_id: Optional[str] = None
    exercise: Optional[Exercise] = None
    completed_count: Optional[int] = Field(default=None, description="None while the quota is unknown")
    goal: int
    phase: Optional[BreathingPhase] = None
