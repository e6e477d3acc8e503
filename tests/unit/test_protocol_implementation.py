"""Test that infrastructure implementations conform to the domain protocols."""

import pytest

from breathing_coach.domain.errors import UnknownExercise
from breathing_coach.domain.interfaces import (
    CancellationHandle,
    Clock,
    ExerciseProvider,
    KeyValueStore,
    Ticker,
)
from breathing_coach.infrastructure import (
    AsyncioTicker,
    DEFAULT_EXERCISES,
    DynamoDBKeyValueStore,
    FakeClock,
    FileKeyValueStore,
    LocalExerciseProvider,
    LocalKeyValueStore,
    ManualTicker,
    SystemClock,
)


def test_key_value_stores_implement_protocol(tmp_path):
    """Test that every storage backend is a KeyValueStore."""
    stores = [
        LocalKeyValueStore(),
        FileKeyValueStore(str(tmp_path / "quota.json")),
        DynamoDBKeyValueStore("test-table"),
    ]

    for store in stores:
        assert isinstance(store, KeyValueStore)
        assert callable(getattr(store, "get"))
        assert callable(getattr(store, "set"))


def test_clocks_implement_protocol():
    """Test that both clocks are Clocks."""
    assert isinstance(SystemClock(), Clock)
    assert isinstance(FakeClock(), Clock)


def test_tickers_implement_protocol():
    """Test that both tickers are Tickers and return cancellation handles."""
    assert isinstance(AsyncioTicker(), Ticker)

    ticker = ManualTicker()
    assert isinstance(ticker, Ticker)
    assert isinstance(ticker.schedule(1.0, lambda: None), CancellationHandle)


def test_local_exercise_provider_implements_protocol():
    """Test that the local catalog is an ExerciseProvider."""
    assert isinstance(LocalExerciseProvider(), ExerciseProvider)


def test_default_catalog():
    """Test the built-in exercises."""
    provider = LocalExerciseProvider()

    assert [e.id for e in provider.list_exercises()] == ["flower", "candle", "bee"]
    flower = provider.get_exercise("flower")
    assert flower.pattern.inhale_seconds == 4
    assert flower.pattern.exhale_seconds == 6
    assert provider.get_exercise("bee").pattern.free_rhythm


def test_unknown_exercise_raises():
    """Test that unknown ids raise UnknownExercise."""
    with pytest.raises(UnknownExercise, match="Exercise with id yoga not found"):
        LocalExerciseProvider().get_exercise("yoga")


def test_custom_catalog_rejects_duplicates():
    """Test that catalog ids must be unique."""
    with pytest.raises(ValueError, match="Duplicate"):
        LocalExerciseProvider([DEFAULT_EXERCISES[0], DEFAULT_EXERCISES[0]])


@pytest.mark.asyncio
async def test_local_key_value_store_round_trip():
    """Test the in-memory store."""
    store = LocalKeyValueStore({"a": "1"})

    assert await store.get("a") == "1"
    assert await store.get("missing") is None
    await store.set("b", "2")
    assert store.get_all() == {"a": "1", "b": "2"}

    store.clear()
    assert store.get_all() == {}
