"""Session entities for the breathing coach application."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SessionStatus(str, Enum):
    """Session status enum."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    ABORTED = "aborted"


class BreathingSession(BaseModel):
    """Session entity representing one timed attempt at an exercise."""

    exercise_id: str
    duration_total: int = Field(gt=0)
    remaining: int = Field(ge=0)
    status: SessionStatus = SessionStatus.RUNNING
    started_at: datetime

    model_config = ConfigDict(
        validate_assignment=True,
        json_schema_extra={
            "example": {
                "exercise_id": "flower",
                "duration_total": 180,
                "remaining": 180,
                "status": "running",
                "started_at": "2024-01-01T09:00:00",
            }
        },
    )

    @model_validator(mode="after")
    def _check_remaining(self) -> "BreathingSession":
        if self.remaining > self.duration_total:
            raise ValueError("remaining cannot exceed duration_total")
        return self

    @property
    def elapsed(self) -> int:
        """Seconds of the session that have already been counted down."""
        return self.duration_total - self.remaining
