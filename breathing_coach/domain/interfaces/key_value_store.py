"""Key-value store interface."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for the persistence collaborator.

    Values are plain strings. Implementations wrap every backend failure
    in ``StorageError`` so callers never see backend-specific exceptions.
    """

    async def get(self, key: str) -> Optional[str]:
        """Read a value.

        Args:
            key: The key to read.

        Returns:
            Optional[str]: The stored value, or None when absent.

        Raises:
            StorageError: If the backend cannot be read.
        """
        ...

    async def set(self, key: str, value: str) -> None:
        """Write a value.

        Args:
            key: The key to write.
            value: The string value to store.

        Raises:
            StorageError: If the backend cannot be written.
        """
        ...
