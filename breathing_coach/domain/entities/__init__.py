"""Domain entities for the breathing coach application."""

from .breathing_session import BreathingSession, SessionStatus
from .daily_quota import DEFAULT_DAILY_GOAL, DailyQuota
from .events import (
    QuotaExhaustedEvent,
    QuotaWriteFailedEvent,
    SessionAbortedEvent,
    SessionCompletedEvent,
    SessionEvent,
    SessionStartedEvent,
)
from .exercise import BreathingPattern, BreathingPhase, Exercise
from .session_view import SessionView, format_remaining
from .websocket_messages import (
    ClientMessage,
    ErrorCode,
    ErrorMessage,
    QuotaExhausted,
    QuotaWriteFailed,
    ServerMessage,
    SessionAborted,
    SessionCompleted,
    SessionStart,
    SessionStarted,
    SessionStop,
    SessionViewMessage,
    SessionViewRequest,
)

__all__ = [
    # Session entities
    "BreathingSession",
    "SessionStatus",
    "SessionView",
    "format_remaining",
    # Quota entities
    "DailyQuota",
    "DEFAULT_DAILY_GOAL",
    # Exercise entities
    "Exercise",
    "BreathingPattern",
    "BreathingPhase",
    # Event entities
    "SessionEvent",
    "SessionStartedEvent",
    "SessionCompletedEvent",
    "QuotaExhaustedEvent",
    "SessionAbortedEvent",
    "QuotaWriteFailedEvent",
    # WebSocket message entities
    "ClientMessage",
    "ServerMessage",
    "SessionStart",
    "SessionStop",
    "SessionViewRequest",
    "SessionViewMessage",
    "SessionStarted",
    "SessionCompleted",
    "SessionAborted",
    "QuotaExhausted",
    "QuotaWriteFailed",
    "ErrorMessage",
    "ErrorCode",
]
