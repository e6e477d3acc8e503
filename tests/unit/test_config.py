"""Tests for application settings and wiring."""

import pytest

from breathing_coach.application.config import Settings
from breathing_coach.application.controller import BreathingCoachController, build_key_value_store
from breathing_coach.infrastructure import (
    AsyncioTicker,
    DynamoDBKeyValueStore,
    FileKeyValueStore,
    LocalKeyValueStore,
    SystemClock,
)


def test_settings_defaults(monkeypatch):
    """Test default session and quota settings."""
    for name in ("SESSION_DURATION_SECONDS", "DAILY_GOAL", "STORAGE_BACKEND"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.session_duration_seconds == 180
    assert settings.daily_goal == 5
    assert settings.tick_interval_seconds == 1.0
    assert settings.storage_backend == "file"
    assert settings.quota_date_key == "meditationDate"
    assert settings.quota_count_key == "meditationCount"


def test_settings_from_environment(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("SESSION_DURATION_SECONDS", "60")
    monkeypatch.setenv("DAILY_GOAL", "3")
    monkeypatch.setenv("STORAGE_BACKEND", "dynamodb")

    settings = Settings(_env_file=None)

    assert settings.session_duration_seconds == 60
    assert settings.daily_goal == 3
    assert settings.storage_backend == "dynamodb"


def test_settings_reject_unknown_backend(monkeypatch):
    """Test that only supported storage backends are accepted."""
    monkeypatch.setenv("STORAGE_BACKEND", "redis")

    with pytest.raises(ValueError):
        Settings(_env_file=None)


@pytest.mark.parametrize(
    "backend,expected",
    [("local", LocalKeyValueStore), ("file", FileKeyValueStore), ("dynamodb", DynamoDBKeyValueStore)],
)
def test_build_key_value_store(tmp_path, backend, expected):
    """Test backend selection."""
    settings = Settings(
        _env_file=None,
        storage_backend=backend,
        storage_file_path=str(tmp_path / "quota.json"),
    )

    assert isinstance(build_key_value_store(settings), expected)


def test_controller_from_settings(tmp_path):
    """Test that the wired controller reflects the settings."""
    settings = Settings(
        _env_file=None,
        session_duration_seconds=90,
        daily_goal=3,
        storage_backend="local",
    )

    coach = BreathingCoachController.from_settings(settings)
    session_controller = coach.session_controller

    assert session_controller.duration_seconds == 90
    assert session_controller.quota_store.goal == 3
    assert isinstance(session_controller.ticker, AsyncioTicker)
    assert isinstance(session_controller.clock, SystemClock)
    assert isinstance(coach.storage, LocalKeyValueStore)
    assert coach.get_health_status()["status"] == "degraded"
