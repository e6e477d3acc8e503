"""Tests for FileKeyValueStore."""

import json

import pytest

from breathing_coach.domain.errors import StorageError
from breathing_coach.infrastructure.file_key_value_store import FileKeyValueStore


@pytest.fixture
def path(tmp_path):
    return tmp_path / "state" / "quota.json"


@pytest.mark.asyncio
async def test_missing_file_reads_as_empty(path):
    """Test that an absent file behaves like an empty store."""
    store = FileKeyValueStore(str(path))

    assert await store.get("meditationDate") is None
    assert not path.exists()


@pytest.mark.asyncio
async def test_values_survive_new_instance(path):
    """Test that values persist across store instances."""
    store = FileKeyValueStore(str(path))
    await store.set("meditationDate", "2024-03-01")
    await store.set("meditationCount", "2")

    reopened = FileKeyValueStore(str(path))
    assert await reopened.get("meditationDate") == "2024-03-01"
    assert await reopened.get("meditationCount") == "2"
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "meditationDate": "2024-03-01",
        "meditationCount": "2",
    }


@pytest.mark.asyncio
async def test_corrupt_file_raises_storage_error(path):
    """Test that an unreadable document surfaces as StorageError."""
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        await FileKeyValueStore(str(path)).get("meditationDate")


@pytest.mark.asyncio
async def test_non_object_document_raises_storage_error(path):
    """Test that a JSON document that is not an object is rejected."""
    path.parent.mkdir(parents=True)
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(StorageError, match="JSON object"):
        await FileKeyValueStore(str(path)).get("meditationDate")


@pytest.mark.asyncio
async def test_unwritable_location_raises_storage_error(tmp_path):
    """Test that a write into a path blocked by a file surfaces as StorageError."""
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = FileKeyValueStore(str(blocker / "quota.json"))

    with pytest.raises(StorageError):
        await store.set("meditationCount", "1")
