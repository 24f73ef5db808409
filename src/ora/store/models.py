"""Data models for the store layer."""

from datetime import datetime

from pydantic import BaseModel, Field, field_serializer

LOCAL_REFERENCE_PREFIX = "local://"


class VideoBlob(BaseModel):
    """A video file uploaded from the user's device."""

    collection: str = Field(description="Slot family: 'persona' or 'training'")
    slot: int = Field(ge=0, description="Zero-based slot index")
    data: bytes = Field(repr=False)
    content_type: str = Field(default="video/mp4")
    filename: str | None = None
    stored_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    @property
    def size_mb(self) -> float:
        return self.size_bytes / 1024 / 1024

    @property
    def reference(self) -> str:
        """Playback reference recorded in URL lists for locally stored videos."""
        return f"{LOCAL_REFERENCE_PREFIX}{self.collection}/{self.slot}"

    @field_serializer("stored_at")
    def serialize_datetime(self, value: datetime) -> str:
        return value.isoformat()
