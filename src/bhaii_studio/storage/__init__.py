"""Durable local storage module for bhaii_studio.

Provides a small key/value store that survives restarts, used to persist
user preferences under a fixed key.
"""

from .base import LocalStorage
from .factory import create_local_storage

__all__ = [
    "LocalStorage",
    "create_local_storage",
]
