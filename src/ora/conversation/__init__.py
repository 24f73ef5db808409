"""Chat messages and the persisted conversation, question, check-in and issue logs."""

from .log import CheckInLog, ConversationLog, IssueReportLog, QuestionLog
from .models import (
    FEELINGS,
    CheckInEntry,
    ConversationLogEntry,
    Feedback,
    IssueReport,
    Message,
    MessageRole,
    QuestionLogEntry,
    estimate_tokens,
    new_id,
)

__all__ = [
    "CheckInEntry",
    "CheckInLog",
    "ConversationLog",
    "ConversationLogEntry",
    "FEELINGS",
    "Feedback",
    "IssueReport",
    "IssueReportLog",
    "Message",
    "MessageRole",
    "QuestionLog",
    "QuestionLogEntry",
    "estimate_tokens",
    "new_id",
]
