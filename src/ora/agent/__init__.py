"""Agent panel service: configuration, video rotation and reply scheduling."""

from .config import QUESTION_LIMIT, ResponseDelays
from .events import (
    CollaborationProgress,
    ConsentRequired,
    FeedbackChanged,
    LinkOpened,
    MessageAdded,
    PanelEvent,
    VideoSelected,
)
from .media import VideoRotation
from .panel import AgentPanel, PendingUpload, SendReceipt
from .scheduler import ReplyScheduler
from .settings import (
    PanelConfiguration,
    load_configuration,
    place_in_slot,
    read_resolver_state,
)

__all__ = [
    "AgentPanel",
    "CollaborationProgress",
    "ConsentRequired",
    "FeedbackChanged",
    "LinkOpened",
    "MessageAdded",
    "PanelConfiguration",
    "PanelEvent",
    "PendingUpload",
    "QUESTION_LIMIT",
    "ReplyScheduler",
    "ResponseDelays",
    "SendReceipt",
    "VideoRotation",
    "VideoSelected",
    "load_configuration",
    "place_in_slot",
    "read_resolver_state",
]
