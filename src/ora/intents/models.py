"""Data models for intent resolution.

Every user message resolves to exactly one Action. Actions are immutable
pydantic models discriminated by ``kind``; each carries the reply text the
assistant sends and the context label written to the conversation log.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class UserTier(str, Enum):
    """Subscription tier of the person using the panel.

    Checkout stores the plan name (solo, avatar, buddy, team); ``premium`` is
    the enterprise grant. Only ``free`` is gated.
    """

    FREE = "free"
    SOLO = "solo"
    AVATAR = "avatar"
    BUDDY = "buddy"
    TEAM = "team"
    PREMIUM = "premium"

    @classmethod
    def parse(cls, value: object) -> "UserTier":
        """Parse a stored tier. Anything unrecognised is treated as free."""
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.FREE

    @property
    def is_paid(self) -> bool:
        return self is not UserTier.FREE


class ConfigCategory(str, Enum):
    """Service categories configured through chat commands."""

    NEWS = "news"
    LIBRARY = "library"
    VIDEO = "video"
    CALENDAR = "calendar"


class VideoTarget(str, Enum):
    """Premium video slot families."""

    PERSONA = "persona"
    TRAINING = "training"

    @property
    def slot_count(self) -> int:
        return 3 if self is VideoTarget.PERSONA else 6


class ConfigurationRecord(BaseModel):
    """A configured external service: display name and link target."""

    model_config = ConfigDict(frozen=True)

    name: str
    url: str


class ResolverState(BaseModel):
    """The stored state intent resolution is allowed to depend on."""

    model_config = ConfigDict(frozen=True)

    tier: UserTier = UserTier.FREE
    has_training_package: bool = False


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field(description="Reply the assistant sends")
    context: str | None = Field(
        default=None,
        description="Label recorded as the conversation log's pill button context"
    )


class ConfigAction(_Action):
    """Store a service configuration (news, library, video, calendar)."""

    kind: Literal["configure"] = "configure"
    category: ConfigCategory
    record: ConfigurationRecord

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def url(self) -> str:
        return self.record.url


class SubscriberEmailAction(_Action):
    """Store the address AI reports are sent to."""

    kind: Literal["subscriber_email"] = "subscriber_email"
    email: str


class EnableTrainingPackageAction(_Action):
    """Activate the premium training content package."""

    kind: Literal["enable_training_package"] = "enable_training_package"


class VideoUploadAction(_Action):
    """Ask the user for a local video file for a slot."""

    kind: Literal["video_upload"] = "video_upload"
    target: VideoTarget
    slot: int = Field(ge=0, description="Zero-based slot")


class VideoUrlAction(_Action):
    """Point a premium video slot at a URL."""

    kind: Literal["video_url"] = "video_url"
    target: VideoTarget
    slot: int = Field(ge=0, description="Zero-based slot")
    url: str


class CustomVideoAction(_Action):
    """Add a video URL to the rotation."""

    kind: Literal["custom_video"] = "custom_video"
    url: str


class PaywallAction(_Action):
    """A premium feature was requested without the required tier or package."""

    kind: Literal["paywall"] = "paywall"
    feature: str


class TopicAction(_Action):
    """Answer with canned topic text."""

    kind: Literal["topic"] = "topic"
    topic: str


class CollaborationAction(_Action):
    """Run the simulated multi-agent consultation.

    ``text`` holds the interim notice; the reply is produced by the
    collaboration sequencer once it finishes.
    """

    kind: Literal["collaboration"] = "collaboration"
    query: str
    specialists: tuple[str, ...]


class FallbackAction(_Action):
    """Nothing matched."""

    kind: Literal["fallback"] = "fallback"


Action = Annotated[
    ConfigAction
    | SubscriberEmailAction
    | EnableTrainingPackageAction
    | VideoUploadAction
    | VideoUrlAction
    | CustomVideoAction
    | PaywallAction
    | TopicAction
    | CollaborationAction
    | FallbackAction,
    Field(discriminator="kind"),
]

CONFIGURATION_KINDS = frozenset({
    "configure",
    "subscriber_email",
    "enable_training_package",
    "video_upload",
    "video_url",
    "custom_video",
})
