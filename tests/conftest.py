"""Shared fixtures for the breathing coach tests."""

from datetime import datetime
from typing import Dict, Optional

import pytest

from breathing_coach.domain.errors import StorageError
from breathing_coach.domain.services import QuotaStore, SessionController
from breathing_coach.infrastructure import (
    FakeClock,
    LocalExerciseProvider,
    LocalKeyValueStore,
    ManualTicker,
)


class FailingKeyValueStore(LocalKeyValueStore):
    """Local store whose reads and writes can be made to fail."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        super().__init__(initial)
        self.fail_reads = False
        self.fail_write_keys: set[str] = set()

    async def get(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise StorageError(f"read of {key} failed")
        return await super().get(key)

    async def set(self, key: str, value: str) -> None:
        if key in self.fail_write_keys:
            raise StorageError(f"write of {key} failed")
        await super().set(key, value)


@pytest.fixture
def clock():
    """Clock frozen on a mid-morning."""
    return FakeClock(datetime(2024, 3, 1, 10, 0, 0))


@pytest.fixture
def storage():
    """Key-value store that can be told to fail."""
    return FailingKeyValueStore()


@pytest.fixture
def ticker():
    """Ticker driven explicitly by the test."""
    return ManualTicker()


@pytest.fixture
def quota_store(storage, clock):
    """Quota store with the default goal of 5."""
    return QuotaStore(storage=storage, clock=clock, goal=5)


@pytest.fixture
def controller(quota_store, ticker, clock):
    """Session controller with a 180 second session."""
    return SessionController(
        exercise_provider=LocalExerciseProvider(),
        quota_store=quota_store,
        ticker=ticker,
        clock=clock,
        duration_seconds=180,
    )


@pytest.fixture
def events(controller):
    """Queue subscribed to the controller's events."""
    return controller.subscribe()
