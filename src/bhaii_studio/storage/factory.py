"""Factory for creating local storage backends."""

from typing import Any

from .base import LocalStorage


def create_local_storage(
    backend: str = "memory",
    **kwargs: Any
) -> LocalStorage:
    """Create a local storage backend.

    Args:
        backend: Backend type ("memory", "json" or "sqlite")
        **kwargs: Backend-specific configuration
            For json and sqlite:
                - path: str | Path

    Returns:
        LocalStorage instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryLocalStorage
        return InMemoryLocalStorage(**kwargs)

    elif backend == "json":
        from .json_file import JsonFileLocalStorage
        return JsonFileLocalStorage(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLiteLocalStorage
        return SQLiteLocalStorage(**kwargs)

    raise ValueError(
        f"Unsupported storage backend: {backend}. "
        f"Supported backends: memory, json, sqlite"
    )
