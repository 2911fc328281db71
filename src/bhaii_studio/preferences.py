"""Preference store.

Serializes ``UserPreferences`` to and from local storage under one fixed
key. Unreadable records are discarded wholesale, never partially
recovered.
"""

import logging

from pydantic import ValidationError

from .config import STORAGE_KEY_USER_PREFS
from .models import UserPreferences
from .storage import LocalStorage

logger = logging.getLogger(__name__)


class PreferenceStore:
    """Persistence adapter for user preferences."""

    def __init__(self, storage: LocalStorage, key: str = STORAGE_KEY_USER_PREFS):
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    async def load(self) -> UserPreferences | None:
        """Read stored preferences.

        Returns:
            The stored preferences, or None when nothing usable is stored.
            A malformed record is purged from storage.
        """
        raw = await self._storage.get_item(self._key)
        if raw is None:
            return None
        try:
            return UserPreferences.from_json(raw)
        except ValidationError as e:
            logger.error("Failed to parse stored user preferences, discarding: %s", e)
            await self._storage.remove_item(self._key)
            return None

    async def save(self, prefs: UserPreferences) -> None:
        """Write the full preferences record."""
        await self._storage.set_item(self._key, prefs.to_json())

    async def clear(self) -> None:
        """Remove stored preferences; a no-op when none exist."""
        await self._storage.remove_item(self._key)
