"""Domain services for the breathing coach application."""

from .quota_store import QuotaStore
from .session_controller import SessionController

__all__ = ["QuotaStore", "SessionController"]
