"""Persisted state for the agent panel.

Key/value state (configuration, logs, tier flags) and the local video store.
"""

from .base import KeyValueStore, VideoStore
from .factory import create_key_value_store, create_video_store
from .keys import StoreKey
from .models import LOCAL_REFERENCE_PREFIX, VideoBlob

__all__ = [
    "KeyValueStore",
    "LOCAL_REFERENCE_PREFIX",
    "StoreKey",
    "VideoBlob",
    "VideoStore",
    "create_key_value_store",
    "create_video_store",
]
