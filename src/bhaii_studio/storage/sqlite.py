"""SQLite local storage backend.

Provides persistent key/value storage using a SQLite database.
Uses aiosqlite for async access.
"""

from pathlib import Path

import aiosqlite

from ..errors import StorageError
from .base import LocalStorage


class SQLiteLocalStorage(LocalStorage):
    """SQLite-backed key/value storage."""

    def __init__(self, path: str | Path = "./bhaii_prefs.db"):
        self._db_path = Path(path).expanduser()
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Initialize database connection and schema."""
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS local_storage (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise StorageError("SQLite storage is not connected")
        return self._connection

    async def get_item(self, key: str) -> str | None:
        connection = self._require_connection()
        async with connection.execute(
            "SELECT value FROM local_storage WHERE key = ?", (key,)
        ) as cursor:
            row = await cursor.fetchone()
        return row[0] if row else None

    async def set_item(self, key: str, value: str) -> None:
        connection = self._require_connection()
        await connection.execute("""
            INSERT INTO local_storage (key, value) VALUES (?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value
        """, (key, value))
        await connection.commit()

    async def remove_item(self, key: str) -> None:
        connection = self._require_connection()
        await connection.execute("DELETE FROM local_storage WHERE key = ?", (key,))
        await connection.commit()

    @property
    def backend_type(self) -> str:
        return "sqlite"

    @property
    def db_path(self) -> Path:
        return self._db_path
