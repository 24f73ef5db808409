"""In-memory store backends.

Simple dict-based storage for session-only state.
Data is lost when the application exits.
"""

from .base import KeyValueStore, VideoStore
from .models import VideoBlob


class InMemoryKeyValueStore(KeyValueStore):
    """In-memory key/value store (session-only).

    Values are kept as JSON text, exactly as the SQLite backend keeps them,
    so decoding behaves the same in tests and in production.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    async def connect(self) -> None:
        """Initialize store (no-op for in-memory)."""
        pass

    async def disconnect(self) -> None:
        """Close store (no-op for in-memory)."""
        pass

    async def read_raw(self, key: str) -> str | None:
        return self._data.get(key)

    async def write_raw(self, key: str, text: str) -> None:
        self._data[key] = text

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def keys(self) -> list[str]:
        return sorted(self._data)

    @property
    def backend_type(self) -> str:
        return "memory"


class InMemoryVideoStore(VideoStore):
    """In-memory video store (session-only)."""

    def __init__(self) -> None:
        self._videos: dict[tuple[str, int], VideoBlob] = {}

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    async def put(self, blob: VideoBlob) -> VideoBlob:
        self._videos[(blob.collection, blob.slot)] = blob
        return blob

    async def get(self, collection: str, slot: int) -> VideoBlob | None:
        return self._videos.get((collection, slot))

    async def get_all(self, collection: str) -> list[VideoBlob]:
        blobs = [b for (c, _), b in self._videos.items() if c == collection]
        return sorted(blobs, key=lambda b: b.slot)

    @property
    def backend_type(self) -> str:
        return "memory"
