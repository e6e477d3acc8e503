"""WebSocket message models for the breathing coach application."""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from .session_view import SessionView


# ===== Client → Server Messages =====


class SessionStart(BaseModel):
    """Request to start a breathing exercise."""

    type: Literal["session.start"] = "session.start"
    exercise_id: str = Field(min_length=1)


class SessionStop(BaseModel):
    """Request to stop the current session and return to idle."""

    type: Literal["session.stop"] = "session.stop"


class SessionViewRequest(BaseModel):
    """Request for a fresh view snapshot."""

    type: Literal["session.view"] = "session.view"


# Union type for all client messages
ClientMessage = Union[SessionStart, SessionStop, SessionViewRequest]


# ===== Server → Client Messages =====


class SessionViewMessage(BaseModel):
    """Current controller state."""

    type: Literal["session.view"] = "session.view"
    view: SessionView


class SessionStarted(BaseModel):
    """A session has started running."""

    type: Literal["session.started"] = "session.started"
    exercise_id: str
    duration_total: int


class SessionCompleted(BaseModel):
    """A session counted down to zero."""

    type: Literal["session.completed"] = "session.completed"
    exercise_id: str
    completed_count: Optional[int] = None
    goal: int
    message: str


class SessionAborted(BaseModel):
    """A running session was abandoned."""

    type: Literal["session.aborted"] = "session.aborted"
    exercise_id: str
    remaining: int


class QuotaExhausted(BaseModel):
    """Today's goal has been reached."""

    type: Literal["quota.exhausted"] = "quota.exhausted"
    completed_count: int
    goal: int
    message: str


class QuotaWriteFailed(BaseModel):
    """A completed session could not be counted."""

    type: Literal["quota.write_failed"] = "quota.write_failed"
    exercise_id: str
    error: str


class ErrorCode(str, Enum):
    """Error codes for WebSocket errors."""

    INVALID_MESSAGE = "INVALID_MESSAGE"
    UNKNOWN_EXERCISE = "UNKNOWN_EXERCISE"
    SESSION_IN_PROGRESS = "SESSION_IN_PROGRESS"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorMessage(BaseModel):
    """Error message from server."""

    type: Literal["error"] = "error"
    code: ErrorCode
    message: str


# Union type for all server messages
ServerMessage = Union[
    SessionViewMessage,
    SessionStarted,
    SessionCompleted,
    SessionAborted,
    QuotaExhausted,
    QuotaWriteFailed,
    ErrorMessage,
]
