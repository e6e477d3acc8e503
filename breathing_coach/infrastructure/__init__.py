"""Infrastructure layer components."""

from .asyncio_ticker import AsyncioCancellationHandle, AsyncioTicker
from .clock_mock import FakeClock, ManualTicker
from .dynamodb_key_value_store import DynamoDBKeyValueStore
from .file_key_value_store import FileKeyValueStore
from .local_exercise_provider import DEFAULT_EXERCISES, LocalExerciseProvider
from .local_key_value_store import LocalKeyValueStore
from .system_clock import SystemClock

__all__ = [
    "AsyncioCancellationHandle",
    "AsyncioTicker",
    "DEFAULT_EXERCISES",
    "DynamoDBKeyValueStore",
    "FakeClock",
    "FileKeyValueStore",
    "LocalExerciseProvider",
    "LocalKeyValueStore",
    "ManualTicker",
    "SystemClock",
]
