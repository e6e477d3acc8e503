"""JSON file implementation of KeyValueStore."""

import asyncio
import json
import logging
import os
from typing import Dict, Optional

from ..domain.errors import StorageError
from ..domain.interfaces.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)


class FileKeyValueStore(KeyValueStore):
    """Key-value store persisted as a JSON object in a local file.

    Blocking file I/O runs in a worker thread. Writes go to a temporary file
    that atomically replaces the document.
    """

    def __init__(self, path: str):
        """Initialize the file store.

        Args:
            path: Location of the JSON document. It is created on first write.
        """
        self.path = path
        self._lock = asyncio.Lock()

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            values = await asyncio.to_thread(self._read)
        value = values.get(key)
        return None if value is None else str(value)

    async def set(self, key: str, value: str) -> None:
        async with self._lock:
            values = await asyncio.to_thread(self._read)
            values[key] = value
            await asyncio.to_thread(self._write, values)

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not contain a JSON object")
        return data

    def _write(self, values: Dict[str, str]) -> None:
        tmp_path = f"{self.path}.tmp"
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(values, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e
        logger.debug(f"Wrote {len(values)} keys to {self.path}")
