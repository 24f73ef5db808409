"""Events the agent panel publishes to its listeners."""

from collections.abc import Callable
from dataclasses import dataclass

from ..collaboration import CollaboratingAgent, SequencerState
from ..conversation import Message


@dataclass(frozen=True)
class MessageAdded:
    message: Message


@dataclass(frozen=True)
class FeedbackChanged:
    message: Message


@dataclass(frozen=True)
class CollaborationProgress:
    state: SequencerState
    agents: tuple[CollaboratingAgent, ...]


@dataclass(frozen=True)
class LinkOpened:
    """A pill button that opens an external link instead of replying."""

    name: str
    url: str


@dataclass(frozen=True)
class VideoSelected:
    url: str


@dataclass(frozen=True)
class ConsentRequired:
    """The free question allowance is used up."""

    question_count: int


PanelEvent = (
    MessageAdded | FeedbackChanged | CollaborationProgress | LinkOpened | VideoSelected
    | ConsentRequired
)

Listener = Callable[[PanelEvent], None]
