"""Append-only logs persisted in the key/value store.

Hidden design decisions:
- Each log is one JSON list under a fixed store key
- Records are appended, never removed; only conversation feedback is updated in place
- Appends and feedback updates rewrite the stored JSON list as it is, so an
  entry that no longer validates is skipped on read but never dropped
- A value that is not a list at all is replaced on the next append
"""

import logging
from typing import Generic, TypeVar

from pydantic import BaseModel

from ..store import KeyValueStore, StoreKey
from .models import (
    CheckInEntry,
    ConversationLogEntry,
    Feedback,
    IssueReport,
    QuestionLogEntry,
    estimate_tokens,
)

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


class _AppendOnlyLog(Generic[RecordT]):
    key: str
    record_cls: type[RecordT]

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def entries(self) -> list[RecordT]:
        """All records, oldest first."""
        return await self._store.get_model_list(self.key, self.record_cls)

    async def append(self, record: RecordT) -> RecordT:
        stored = await self._raw_entries()
        stored.append(record.model_dump(mode="json", by_alias=True))
        await self._store.set(self.key, stored)
        return record

    async def count(self) -> int:
        return len(await self.entries())

    async def _raw_entries(self) -> list:
        stored = await self._store.get(self.key, [])
        if not isinstance(stored, list):
            logger.warning("Replacing non-list value stored under %r", self.key)
            return []
        return stored


class ConversationLog(_AppendOnlyLog[ConversationLogEntry]):
    """Record of every resolved exchange, used for feedback and analytics."""

    key = StoreKey.CONVERSATION_LOGS
    record_cls = ConversationLogEntry

    async def record(
        self,
        user_question: str,
        ai_response: str,
        context: str | None = None,
        *,
        session_id: str,
        user_tier: str = "free",
        conversation_length: int = 0,
        data_consent: bool = False,
    ) -> str:
        """Append an exchange and return the new entry id."""
        entry = ConversationLogEntry(
            session_id=session_id,
            user_tier=user_tier,
            user_question=user_question,
            ai_response=ai_response,
            pill_button_context=context,
            tokens_used=estimate_tokens(user_question, ai_response),
            conversation_length=conversation_length,
            data_consent=data_consent,
        )
        await self.append(entry)
        logger.debug("Logged exchange %s (%s)", entry.id, context or "no context")
        return entry.id

    async def get(self, entry_id: str) -> ConversationLogEntry | None:
        for entry in await self.entries():
            if entry.id == entry_id:
                return entry
        return None

    async def update_feedback(self, entry_id: str, feedback: Feedback | None) -> bool:
        """Set or clear the feedback of one entry.

        Returns:
            False when no entry has that id
        """
        stored = await self._raw_entries()
        for item in stored:
            if isinstance(item, dict) and item.get("id") == entry_id:
                item["feedback"] = feedback.value if feedback is not None else None
                await self._store.set(self.key, stored)
                return True
        logger.warning("No conversation log entry with id %s", entry_id)
        return False


class QuestionLog(_AppendOnlyLog[QuestionLogEntry]):
    key = StoreKey.AGENT_QUESTION_LOGS
    record_cls = QuestionLogEntry

    async def record(self, topic: str, question: str, is_pill_button: bool = False) -> None:
        await self.append(
            QuestionLogEntry(topic=topic, question=question, is_pill_button=is_pill_button)
        )


class CheckInLog(_AppendOnlyLog[CheckInEntry]):
    key = StoreKey.FEEDBACK_LOGS
    record_cls = CheckInEntry

    async def record(self, feeling: str | None, additional_feedback: str = "") -> CheckInEntry:
        return await self.append(
            CheckInEntry(feeling=feeling, additional_feedback=additional_feedback)
        )


class IssueReportLog(_AppendOnlyLog[IssueReport]):
    key = StoreKey.ISSUE_REPORTS
    record_cls = IssueReport
