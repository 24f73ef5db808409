"""The chat panel service.

Hidden design decisions:
- Side effects of an Action are written to the store before its reply is
  scheduled, so the next message already sees them
- Every resolved message gets exactly one conversation log entry, written when
  its reply is delivered; a reply cancelled by ``close`` is never logged
- Replies are delivered through a ReplyScheduler (send order, cancellable)

Example:
    >>> panel = AgentPanel(create_key_value_store("memory"), delays=ResponseDelays.instant())
    >>> await panel.open()
    >>> receipt = await panel.send("connect news to CNN")
    >>> await panel.wait_idle()
    >>> panel.messages[-1].content.startswith("✅ News source configured")
    True
"""

import logging
from dataclasses import dataclass

from ..collaboration import CollaborationSequencer, SequencerState
from ..collaboration.models import CollaboratingAgent
from ..conversation import (
    CheckInEntry,
    CheckInLog,
    ConversationLog,
    Feedback,
    IssueReport,
    IssueReportLog,
    Message,
    MessageRole,
    QuestionLog,
    new_id,
)
from ..intents import (
    Action,
    CollaborationAction,
    ConfigAction,
    CustomVideoAction,
    EnableTrainingPackageAction,
    IntentResolver,
    SubscriberEmailAction,
    TopicAction,
    UserTier,
    VideoTarget,
    VideoUploadAction,
    VideoUrlAction,
)
from ..intents.resolver import UPLOAD_CONTEXTS
from ..intents.topics import FOLLOW_UPS, lookup
from ..store import KeyValueStore, StoreKey, VideoBlob, VideoStore, create_video_store
from .config import (
    INVALID_UPLOAD_MESSAGE,
    NEWS_PILL,
    NO_PENDING_UPLOAD_MESSAGE,
    PERSONA_UPLOAD_SUCCESS,
    QUESTION_LIMIT,
    TRAINING_UPLOAD_SUCCESS,
    ResponseDelays,
)
from .events import (
    CollaborationProgress,
    ConsentRequired,
    FeedbackChanged,
    LinkOpened,
    Listener,
    MessageAdded,
    PanelEvent,
    VideoSelected,
)
from .media import VideoRotation
from .scheduler import ReplyScheduler
from .settings import (
    SLOT_LIST_KEYS,
    PanelConfiguration,
    load_configuration,
    place_in_slot,
    save_record,
    save_tier,
)

logger = logging.getLogger(__name__)

PILL_RULE = "pill_button"
UNMATCHED_TOPIC = "Custom"

UPLOAD_LOG_QUESTIONS: dict[VideoTarget, str] = {
    VideoTarget.PERSONA: "Upload video to slot {slot}",
    VideoTarget.TRAINING: "Upload training video {slot}",
}
UPLOAD_SUCCESS: dict[VideoTarget, str] = {
    VideoTarget.PERSONA: PERSONA_UPLOAD_SUCCESS,
    VideoTarget.TRAINING: TRAINING_UPLOAD_SUCCESS,
}


@dataclass
class SendReceipt:
    """What happened to a submitted message."""

    message: Message
    action: Action
    rule: str
    consent_required: bool = False


@dataclass(frozen=True)
class PendingUpload:
    target: VideoTarget
    slot: int


class AgentPanel:
    """Chat panel: resolves messages, applies configuration and delivers replies."""

    def __init__(
        self,
        store: KeyValueStore,
        video_store: VideoStore | None = None,
        *,
        resolver: IntentResolver | None = None,
        delays: ResponseDelays | None = None,
    ):
        self.store = store
        self.video_store = video_store or create_video_store("memory")
        self.resolver = resolver or IntentResolver()
        self.delays = delays or ResponseDelays()
        self.sequencer = CollaborationSequencer(
            consult_delay=self.delays.consult, synthesis_delay=self.delays.synthesis
        )
        self.scheduler = ReplyScheduler()
        self.conversation_log = ConversationLog(store)
        self.question_log = QuestionLog(store)
        self.check_in_log = CheckInLog(store)
        self.issue_reports = IssueReportLog(store)

        self.configuration = PanelConfiguration()
        self.rotation = VideoRotation(store)
        self.session_id = ""
        self.pending_upload: PendingUpload | None = None
        self._messages: list[Message] = []
        self._listeners: list[Listener] = []
        self._is_open = False

    async def __aenter__(self) -> "AgentPanel":
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def messages(self) -> list[Message]:
        """Messages of the current session, in display order."""
        return list(self._messages)

    @property
    def is_collaborating(self) -> bool:
        return self.sequencer.state is not SequencerState.IDLE

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    # Lifecycle

    async def open(self) -> PanelConfiguration:
        """Connect the stores, load configuration and start a new session."""
        await self.store.connect()
        await self.video_store.connect()
        await self.reload_configuration()
        await self.rotation.restore()
        self.session_id = new_id("session")
        self._messages = []
        self.pending_upload = None
        self._is_open = True
        logger.info(
            "Panel opened (session %s, tier %s)", self.session_id, self.configuration.tier.value
        )
        return self.configuration

    async def reload_configuration(self) -> PanelConfiguration:
        self.configuration = await load_configuration(self.store, self.video_store)
        self._sync_rotation()
        return self.configuration

    async def close(self) -> None:
        """Cancel replies still pending and disconnect the stores."""
        self.scheduler.cancel_all()
        await self.scheduler.wait_idle()
        if self._is_open:
            await self.video_store.disconnect()
            await self.store.disconnect()
        self._is_open = False
        logger.info("Panel closed")

    async def wait_idle(self) -> None:
        """Wait until every scheduled reply has been delivered."""
        await self.scheduler.wait_idle()

    # Messages

    async def send(self, text: str) -> SendReceipt:
        """Submit a typed message.

        Raises:
            ValueError: If the message is blank
            RuntimeError: If the panel is not open
        """
        if not text.strip():
            raise ValueError("Cannot send an empty message")
        self._require_open()

        consent_required = await self._count_question()
        message = self._append(Message(role=MessageRole.USER, content=text))

        rule, action = self.resolver.explain(text, self.configuration.resolver_state)
        logger.info("Message resolved by %s rule (%s)", rule, action.kind)

        if rule == "keyword_topic" and isinstance(action, TopicAction):
            await self.question_log.record(action.topic, text)
        elif rule == "fallback":
            await self.question_log.record(UNMATCHED_TOPIC, text)

        await self._apply(action)

        if isinstance(action, CollaborationAction):
            self.scheduler.schedule(0, lambda: self._deliver_collaboration(text), name=rule)
        else:
            self._schedule_reply(self._delay_for(rule, action), text, action.text, action.context)

        return SendReceipt(
            message=message, action=action, rule=rule, consent_required=consent_required
        )

    async def click_pill(self, category: str) -> SendReceipt | None:
        """Handle a pill button.

        News opens the configured news source and produces no reply.
        """
        self._require_open()
        await self.question_log.record(category, category, is_pill_button=True)

        news = self.configuration.news
        if category == NEWS_PILL and news is not None:
            self._emit(LinkOpened(name=news.name, url=news.url))
            return None

        message = self._append(Message(role=MessageRole.USER, content=category))
        video = await self.rotation.for_category(category)
        self._emit(VideoSelected(url=video))

        action = TopicAction(text=lookup(category), context=category, topic=category)
        self._schedule_reply(self.delays.topic, category, action.text, category)
        follow_up = FOLLOW_UPS.get(category)
        if follow_up is not None:
            self.scheduler.schedule(
                self.delays.topic + self.delays.follow_up,
                lambda: self._deliver_plain(follow_up),
                name="follow_up",
            )
        return SendReceipt(message=message, action=action, rule=PILL_RULE)

    def request_upload(self, target: VideoTarget, slot: int) -> None:
        """Mark ``slot`` (0-based) as waiting for a file, as an upload command would.

        Raises:
            PermissionError: If the tier or training package does not allow it
            ValueError: If the slot is out of range
        """
        state = self.configuration.resolver_state
        if target is VideoTarget.PERSONA and not state.tier.is_paid:
            raise PermissionError("Persona videos require a paid tier")
        if target is VideoTarget.TRAINING and not state.has_training_package:
            raise PermissionError("Training videos require the training package")
        if not 0 <= slot < target.slot_count:
            raise ValueError(
                f"{target.value.capitalize()} slot must be between 1 and {target.slot_count}"
            )
        self.pending_upload = PendingUpload(target=target, slot=slot)

    async def upload_video(
        self, data: bytes, content_type: str, filename: str | None = None
    ) -> VideoBlob | None:
        """Store a video file for the slot the last upload command asked for.

        A non-video file only produces a warning; nothing is stored and the
        slot stays pending.
        """
        self._require_open()
        if not content_type.startswith("video/"):
            logger.warning("Rejected upload %s (%s)", filename or "<unnamed>", content_type)
            self.scheduler.schedule(
                self.delays.upload_warning, lambda: self._deliver_plain(INVALID_UPLOAD_MESSAGE)
            )
            return None

        pending = self.pending_upload
        if pending is None:
            self.scheduler.schedule(
                self.delays.upload_warning, lambda: self._deliver_plain(NO_PENDING_UPLOAD_MESSAGE)
            )
            return None

        blob = await self.video_store.put(VideoBlob(
            collection=pending.target.value,
            slot=pending.slot,
            data=data,
            content_type=content_type,
            filename=filename,
        ))
        await self._set_slot_url(pending.target, pending.slot, blob.reference)
        self.pending_upload = None
        logger.info(
            "Stored %s video in slot %d (%.2f MB)",
            pending.target.value, pending.slot + 1, blob.size_mb,
        )

        slot = pending.slot + 1
        self._schedule_reply(
            self.delays.upload_result,
            UPLOAD_LOG_QUESTIONS[pending.target].format(slot=slot),
            UPLOAD_SUCCESS[pending.target].format(slot=slot, size_mb=blob.size_mb),
            UPLOAD_CONTEXTS[pending.target],
        )
        return blob

    async def give_feedback(self, message_id: str, feedback: Feedback | None) -> bool:
        """Set or clear thumbs up/down on an assistant message and its log entry.

        The message is replaced by a copy carrying the new feedback.

        Returns:
            False when no assistant message has that id
        """
        for position, message in enumerate(self._messages):
            if message.id == message_id and message.is_assistant:
                rated = message.model_copy(update={"feedback": feedback})
                self._messages[position] = rated
                if rated.log_entry_id is not None:
                    await self.conversation_log.update_feedback(rated.log_entry_id, feedback)
                self._emit(FeedbackChanged(message=rated))
                return True
        return False

    # Account and reports

    async def accept_agreement(self, data_consent: bool) -> None:
        await self.store.set(StoreKey.USER_AGREEMENT_ACCEPTED, True)
        await self.store.set(StoreKey.DATA_CONSENT, data_consent)

    async def set_tier(self, tier: UserTier) -> None:
        await save_tier(self.store, tier)
        self.configuration.tier = tier

    async def check_in(self, feeling: str | None, note: str = "") -> CheckInEntry:
        return await self.check_in_log.record(feeling, note)

    async def report_issue(
        self, observation: str, recommendation: str = "", **details: str
    ) -> IssueReport:
        report = IssueReport(
            observation=observation,
            recommendation=recommendation,
            subscriber_email=self.configuration.subscriber_email,
            **details,
        )
        await self.issue_reports.append(report)
        if report.subscriber_email:
            logger.info("Issue report recorded for %s", report.subscriber_email)
        return report

    # Internals

    def _require_open(self) -> None:
        if not self._is_open:
            raise RuntimeError("Agent panel is not open. Call open() first.")

    def _emit(self, event: PanelEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _append(self, message: Message) -> Message:
        self._messages.append(message)
        self._emit(MessageAdded(message=message))
        return message

    def _sync_rotation(self) -> None:
        config = self.configuration
        self.rotation.persona_urls = list(config.persona_video_urls)
        self.rotation.custom_urls = list(config.custom_video_urls)
        self.rotation.training_urls = list(config.training_video_urls)
        self.rotation.has_training_package = config.has_training_package

    async def _count_question(self) -> bool:
        """Count a typed question toward the free allowance.

        Returns:
            True once the allowance is reached and the agreement is needed
        """
        if await self.store.get(StoreKey.USER_AGREEMENT_ACCEPTED):
            return False
        count = await self.store.get(StoreKey.USER_QUESTION_COUNT, 0)
        count = (count if isinstance(count, int) else 0) + 1
        await self.store.set(StoreKey.USER_QUESTION_COUNT, count)
        if count >= QUESTION_LIMIT:
            self._emit(ConsentRequired(question_count=count))
            return True
        return False

    async def _apply(self, action: Action) -> None:
        config = self.configuration
        if isinstance(action, ConfigAction):
            await save_record(self.store, action.category, action.record)
            setattr(config, action.category.value, action.record)
        elif isinstance(action, SubscriberEmailAction):
            await self.store.set(StoreKey.SUBSCRIBER_EMAIL, action.email)
            config.subscriber_email = action.email
        elif isinstance(action, EnableTrainingPackageAction):
            await self.store.set(StoreKey.HAS_TRAINING_PACKAGE, True)
            config.has_training_package = True
        elif isinstance(action, VideoUploadAction):
            self.pending_upload = PendingUpload(target=action.target, slot=action.slot)
        elif isinstance(action, VideoUrlAction):
            await self._set_slot_url(action.target, action.slot, action.url)
        elif isinstance(action, CustomVideoAction):
            config.custom_video_urls = [*config.custom_video_urls, action.url]
            await self.store.set(StoreKey.CUSTOM_VIDEO_URLS, config.custom_video_urls)
        self._sync_rotation()

    async def _set_slot_url(self, target: VideoTarget, slot: int, url: str) -> None:
        urls = place_in_slot(self.configuration.slot_urls(target), slot, url)
        if target is VideoTarget.PERSONA:
            self.configuration.persona_video_urls = urls
        else:
            self.configuration.training_video_urls = urls
        await self.store.set(SLOT_LIST_KEYS[target], urls)
        self._sync_rotation()

    def _delay_for(self, rule: str, action: Action) -> float:
        if action.kind == "video_upload":
            return self.delays.upload_prompt
        if action.kind == "fallback":
            return self.delays.fallback
        if action.kind == "topic":
            if rule == "keyword_topic":
                return self.delays.topic
            return self.delays.keyword
        return self.delays.configuration

    def _schedule_reply(
        self, delay: float, question: str, response: str, context: str | None
    ) -> None:
        self.scheduler.schedule(delay, lambda: self._deliver_logged(question, response, context))

    async def _deliver_logged(
        self,
        question: str,
        response: str,
        context: str | None,
        agents: tuple[CollaboratingAgent, ...] = (),
    ) -> None:
        entry_id = await self.conversation_log.record(
            question,
            response,
            context,
            session_id=self.session_id,
            user_tier=self.configuration.tier.value,
            conversation_length=len(self._messages) + 1,
            data_consent=bool(await self.store.get(StoreKey.DATA_CONSENT, False)),
        )
        self._append(Message(
            role=MessageRole.ASSISTANT,
            content=response,
            collaborating_agents=agents,
            is_multi_agent=bool(agents),
            log_entry_id=entry_id,
        ))

    async def _deliver_plain(self, text: str) -> None:
        self._append(Message(role=MessageRole.ASSISTANT, content=text))

    async def _deliver_collaboration(self, query: str) -> None:
        synthesis = await self.sequencer.run(
            query,
            on_update=lambda state, agents: self._emit(CollaborationProgress(state, agents)),
        )
        await self._deliver_logged(query, synthesis.content, "Multi-Agent", synthesis.agents)
        self._emit(CollaborationProgress(SequencerState.IDLE, ()))
