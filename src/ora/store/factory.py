"""Factories for creating store backends."""

from typing import Any

from .base import KeyValueStore, VideoStore

SUPPORTED_BACKENDS = ("memory", "sqlite")


def create_key_value_store(backend: str = "memory", **kwargs: Any) -> KeyValueStore:
    """Create a key/value store backend.

    Args:
        backend: Backend type ("memory" or "sqlite")
        **kwargs: Backend-specific configuration (``path`` for sqlite)

    Returns:
        KeyValueStore instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryKeyValueStore
        return InMemoryKeyValueStore(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLiteKeyValueStore
        return SQLiteKeyValueStore(**kwargs)

    raise ValueError(
        f"Unsupported store backend: {backend}. "
        f"Supported backends: {', '.join(SUPPORTED_BACKENDS)}"
    )


def create_video_store(backend: str = "memory", **kwargs: Any) -> VideoStore:
    """Create a video store backend.

    Args:
        backend: Backend type ("memory" or "sqlite")
        **kwargs: Backend-specific configuration (``path`` for sqlite)

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryVideoStore
        return InMemoryVideoStore(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLiteVideoStore
        return SQLiteVideoStore(**kwargs)

    raise ValueError(
        f"Unsupported video store backend: {backend}. "
        f"Supported backends: {', '.join(SUPPORTED_BACKENDS)}"
    )
