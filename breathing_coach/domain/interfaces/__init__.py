"""Domain interfaces for the breathing coach application."""

from .clock import CancellationHandle, Clock, TickCallback, Ticker
from .exercise_provider import ExerciseProvider
from .key_value_store import KeyValueStore

__all__ = [
    "CancellationHandle",
    "Clock",
    "ExerciseProvider",
    "KeyValueStore",
    "TickCallback",
    "Ticker",
]
