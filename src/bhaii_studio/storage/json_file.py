"""JSON file local storage backend.

Stores every key in a single JSON object on disk. Writes go to a
temporary file that replaces the original, so a crash never leaves a
half-written store behind.
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path

from ..errors import StorageError
from .base import LocalStorage

logger = logging.getLogger(__name__)


class JsonFileLocalStorage(LocalStorage):
    """Key/value storage persisted to one JSON file."""

    def __init__(self, path: str | Path = "./bhaii_prefs.json"):
        self._path = Path(path).expanduser()
        self._items: dict[str, str] | None = None
        self._lock = asyncio.Lock()

    async def connect(self) -> None:
        """Load the file contents, starting empty if missing or unreadable."""
        self._items = await asyncio.to_thread(self._read_file)

    async def disconnect(self) -> None:
        self._items = None

    def _read_file(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self._path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: top level is not an object", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_file(self, items: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=".tmp-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _require_items(self) -> dict[str, str]:
        if self._items is None:
            raise StorageError("JSON storage is not connected")
        return self._items

    async def get_item(self, key: str) -> str | None:
        return self._require_items().get(key)

    async def set_item(self, key: str, value: str) -> None:
        async with self._lock:
            items = self._require_items()
            items[key] = value
            await asyncio.to_thread(self._write_file, dict(items))

    async def remove_item(self, key: str) -> None:
        async with self._lock:
            items = self._require_items()
            if key not in items:
                return
            del items[key]
            await asyncio.to_thread(self._write_file, dict(items))

    @property
    def backend_type(self) -> str:
        return "json"

    @property
    def path(self) -> Path:
        return self._path
