"""Data models for chat messages and the persisted logs.

Persisted records use camelCase aliases and epoch-millisecond timestamps so
the stored JSON keeps the shape the web panel writes to local storage.
"""

import math
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel
from uuid_extensions import uuid7

from ..collaboration.models import CollaboratingAgent


def new_id(prefix: str) -> str:
    """Time-ordered unique id, e.g. ``msg_0190f5...``."""
    return f"{prefix}_{uuid7().hex}"


def us_date(value: datetime) -> str:
    """Date as month/day/year without padding, e.g. ``1/6/2026``."""
    return f"{value.month}/{value.day}/{value.year}"


def estimate_tokens(question: str, response: str) -> int:
    """Rough token count: one token per four characters."""
    return math.ceil((len(question) + len(response)) / 4)


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class Feedback(str, Enum):
    """Thumbs up/down on an assistant reply."""

    THUMBS_UP = "thumbs_up"
    THUMBS_DOWN = "thumbs_down"

    @classmethod
    def parse(cls, value: str) -> "Feedback":
        """Accept ``up``/``down`` as well as the stored values."""
        shorthand = {"up": cls.THUMBS_UP, "down": cls.THUMBS_DOWN}
        normalized = value.strip().lower()
        if normalized in shorthand:
            return shorthand[normalized]
        return cls(normalized)


class Message(BaseModel):
    """A chat message shown in the panel.

    Frozen; a feedback change replaces the message with a copy.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: new_id("msg"))
    role: MessageRole
    content: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    feedback: Feedback | None = None
    collaborating_agents: tuple[CollaboratingAgent, ...] = ()
    is_multi_agent: bool = False
    log_entry_id: str | None = Field(
        default=None,
        description="Conversation log entry recorded for this reply"
    )

    @property
    def is_assistant(self) -> bool:
        return self.role is MessageRole.ASSISTANT


class _LogRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    timestamp: datetime = Field(default_factory=datetime.utcnow)

    @field_serializer("timestamp")
    def serialize_timestamp(self, value: datetime) -> int:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp() * 1000)


class ConversationLogEntry(_LogRecord):
    """One resolved exchange."""

    id: str = Field(default_factory=lambda: new_id("conv"))
    session_id: str
    user_tier: str = "free"
    user_question: str
    ai_response: str
    pill_button_context: str | None = None
    tokens_used: int = 0
    conversation_length: int = 0
    data_consent: bool = False
    feedback: Feedback | None = None


class QuestionLogEntry(_LogRecord):
    """A question asked by typing or by a pill button."""

    topic: str
    question: str
    is_pill_button: bool = False


FEELINGS: tuple[str, ...] = (
    "Very Happy", "Happy", "Excited", "Celebrating", "Peaceful", "Confident",
    "Amazed", "Blessed", "Grateful", "Satisfied", "Neutral", "Thinking",
    "Speechless", "Awkward", "Concerned", "Confused", "Worried", "Sad",
    "Disappointed", "Tired", "Frustrated", "Annoyed", "Angry", "Overwhelmed",
)


class CheckInEntry(_LogRecord):
    """A mood check-in."""

    feeling: str | None = None
    additional_feedback: str = ""
    date: str = Field(default_factory=lambda: us_date(datetime.utcnow()))


class IssueReport(_LogRecord):
    """A "Report AI Issue" submission."""

    observation: str
    recommendation: str = ""
    event_name: str = ""
    point_of_contact: str = ""
    impact: str = ""
    subscriber_email: str = ""
    review_date: str = Field(default_factory=lambda: us_date(datetime.utcnow()))
