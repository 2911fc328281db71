"""Abstract base class for local storage backends.

This module defines the interface for durable key/value storage.
The abstraction hides:
- Storage format (JSON file, SQLite, in-memory)
- Persistence mechanism
- Connection management
"""

from abc import ABC, abstractmethod


class LocalStorage(ABC):
    """Abstract key/value storage backend.

    Values are opaque strings. Removing a missing key is a no-op.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the storage backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the storage backend gracefully."""

    @abstractmethod
    async def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    async def set_item(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        """Remove a key if present."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "LocalStorage":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()
