"""Abstract base classes for the persisted state of the agent panel.

This module defines the interfaces the rest of the package writes through.
The abstraction hides:
- Storage format (JSON text per key)
- Persistence mechanism (in-memory dict, SQLite file)
- The policy for unreadable values (they read back as the caller's default)
"""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .models import VideoBlob

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class KeyValueStore(ABC):
    """Abstract key/value store holding JSON-serializable values.

    Backends only move raw text. Decoding lives here so that every backend
    shares the same fail-open behaviour: a value that cannot be decoded or
    validated is logged and replaced by the caller's default.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the backend gracefully."""

    @abstractmethod
    async def read_raw(self, key: str) -> str | None:
        """Return the stored text for a key, or None when absent."""

    @abstractmethod
    async def write_raw(self, key: str, text: str) -> None:
        """Store text under a key, replacing any previous value."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error."""

    @abstractmethod
    async def keys(self) -> list[str]:
        """List stored keys in ascending order."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def get(self, key: str, default: Any = None) -> Any:
        """Read and decode a value.

        Args:
            key: Store key
            default: Returned when the key is absent or its value is corrupt

        Returns:
            The decoded JSON value, or ``default``
        """
        raw = await self.read_raw(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable value stored under %r", key)
            return default

    async def set(self, key: str, value: Any) -> None:
        """Encode and write a value."""
        await self.write_raw(key, json.dumps(value))

    async def get_model(
        self,
        key: str,
        model_cls: type[ModelT],
        default: ModelT | None = None
    ) -> ModelT | None:
        """Read a value and validate it into a pydantic model."""
        value = await self.get(key)
        if value is None:
            return default
        try:
            return model_cls.model_validate(value)
        except ValidationError:
            logger.warning("Ignoring invalid %s stored under %r", model_cls.__name__, key)
            return default

    async def set_model(self, key: str, model: BaseModel) -> None:
        """Write a pydantic model using its aliases."""
        await self.set(key, model.model_dump(mode="json", by_alias=True))

    async def get_model_list(self, key: str, model_cls: type[ModelT]) -> list[ModelT]:
        """Read a list of models, skipping entries that fail validation.

        A value that is not a list at all reads as empty.
        """
        value = await self.get(key, [])
        if not isinstance(value, list):
            logger.warning("Expected a list under %r, found %s", key, type(value).__name__)
            return []
        models = []
        for position, item in enumerate(value):
            try:
                models.append(model_cls.model_validate(item))
            except ValidationError:
                logger.warning(
                    "Skipping invalid %s at position %d under %r",
                    model_cls.__name__, position, key,
                )
        return models

    async def get_str_list(self, key: str) -> list[str]:
        """Read a list of strings, dropping anything that is not a string."""
        value = await self.get(key, [])
        if not isinstance(value, list):
            logger.warning("Expected a list under %r, found %s", key, type(value).__name__)
            return []
        return [item for item in value if isinstance(item, str)]


class VideoStore(ABC):
    """Abstract object store for uploaded video files.

    Videos are addressed by collection ("persona" or "training") and
    zero-based slot. Writing a slot replaces its previous video.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the backend gracefully."""

    @abstractmethod
    async def put(self, blob: VideoBlob) -> VideoBlob:
        """Store a video in its slot and return it."""

    @abstractmethod
    async def get(self, collection: str, slot: int) -> VideoBlob | None:
        """Fetch one slot."""

    @abstractmethod
    async def get_all(self, collection: str) -> list[VideoBlob]:
        """All videos of a collection, sorted by slot."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
