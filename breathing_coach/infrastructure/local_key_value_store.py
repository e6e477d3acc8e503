"""Local in-memory implementation of KeyValueStore."""

from typing import Dict, Optional

from ..domain.interfaces.key_value_store import KeyValueStore


class LocalKeyValueStore(KeyValueStore):
    """Local in-memory implementation of the KeyValueStore protocol.

    Stores values in a dictionary for testing and development purposes.
    Nothing survives a process restart.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        """Initialize the store, optionally with pre-populated values."""
        self._values: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def clear(self) -> None:
        """Clear all values from the dictionary."""
        self._values.clear()

    def get_all(self) -> Dict[str, str]:
        """Get all stored values.

        Returns:
            Dict[str, str]: Copy of the stored values.
        """
        return self._values.copy()
