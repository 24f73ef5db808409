"""Intent resolver.

Hidden design decisions:
- The priority order of intents (an explicit tuple of rules, first match wins)
- Where premium gating applies (inside the gated rules, so it never reorders them)
- The reply text and log context produced for each intent

Resolution is a pure function of the message text and ``ResolverState``;
nothing from earlier turns is consulted.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..collaboration.roster import MULTI_AGENT_TRIGGERS, select_agents
from .models import (
    Action,
    CollaborationAction,
    ConfigAction,
    ConfigCategory,
    ConfigurationRecord,
    CustomVideoAction,
    EnableTrainingPackageAction,
    FallbackAction,
    PaywallAction,
    ResolverState,
    SubscriberEmailAction,
    TopicAction,
    VideoTarget,
    VideoUploadAction,
    VideoUrlAction,
)
from .patterns import SLOT_TARGETS, PatternCategory, PatternLibrary
from .topics import (
    AGILE_RESPONSE,
    FALLBACK_RESPONSE,
    LEADER_QUESTION_RESPONSE,
    detect_keyword_topic,
    lookup,
)

logger = logging.getLogger(__name__)

CONFIGURATION_CONTEXT = "Configuration"
PAYWALL_CONTEXT = "Premium Feature"
COLLABORATION_CONTEXT = "Multi-Agent"

_CONFIRMATIONS: dict[ConfigCategory, str] = {
    ConfigCategory.NEWS: (
        "✅ News source configured successfully! The News button will now link to {name}. "
        "Click the News pill button to visit {url}"
    ),
    ConfigCategory.LIBRARY: (
        "✅ Library configured successfully! The Library button will now link to {name}. "
        "Click the Library pill button to visit {url}"
    ),
    ConfigCategory.VIDEO: (
        "✅ Video service configured successfully! The Video button will now link to {name}. "
        "Click the Video pill button to visit {url}"
    ),
    ConfigCategory.CALENDAR: (
        "✅ Calendar service configured successfully! The Calendar button will now link to "
        "{name}. Click the Calendar icon to visit {url}"
    ),
}

SUBSCRIBER_EMAIL_CONFIRMATION = (
    "✅ Subscriber email configured successfully! All AI reports will be sent to {email}. "
    'When you submit a report via the "Report AI Issue" button, it will include this email '
    "address."
)

TRAINING_PACKAGE_CONFIRMATION = (
    "🎓 Premium Training Content package activated! You now have 6 custom training video "
    "slots (1 minute each). Perfect for:\n\n"
    "• Annual compliance training\n• Summer safety programs\n• Onboarding materials\n"
    "• Seasonal updates\n\n"
    "Use commands like:\n"
    '• "set training video 1 to [URL]" for Supabase/web videos\n'
    '• "upload training video 1" for local files\n\n'
    "Start configuring your training videos now!"
)

UPLOAD_PROMPTS: dict[VideoTarget, str] = {
    VideoTarget.PERSONA: (
        "📤 Please select a video file from your device to upload to Persona slot {slot}. "
        "The video will be stored locally in your browser."
    ),
    VideoTarget.TRAINING: (
        "📤 Please select a training video file (recommended: ~1 minute) from your device to "
        "upload to Training slot {slot}. The video will be stored locally in your browser."
    ),
}

UPLOAD_CONTEXTS: dict[VideoTarget, str] = {
    VideoTarget.PERSONA: "Local Video Upload",
    VideoTarget.TRAINING: "Training Video Upload",
}

URL_CONFIRMATIONS: dict[VideoTarget, str] = {
    VideoTarget.PERSONA: (
        "✅ Persona video {slot} configured successfully! This premium avatar content will "
        "display first when you open the agent, taking priority over all other videos."
    ),
    VideoTarget.TRAINING: (
        "✅ Training video {slot} configured successfully! This training content will play "
        "first when you tap the Training button. Perfect for annual training or summer safety "
        "programs!"
    ),
}

URL_CONTEXTS: dict[VideoTarget, str] = {
    VideoTarget.PERSONA: "Persona Video",
    VideoTarget.TRAINING: "Training Video",
}

CUSTOM_VIDEO_CONFIRMATION = (
    "✅ Video successfully added to your library! Your custom video has been added to the "
    "rotation and will play along with the default leadership videos."
)

PAYWALLS: dict[str, str] = {
    "persona_upload": (
        "⚠️ Uploading local persona videos is a premium feature. Please upgrade to a paid plan "
        "to add persona video content."
    ),
    "persona_url": (
        "⚠️ Configuring persona videos is a premium feature. Please upgrade to a paid plan to "
        "add persona video content."
    ),
    "training_upload": (
        "⚠️ The Premium Training Content package is required to upload training videos. This "
        "package includes 6 custom training video slots (1 minute each) - perfect for annual "
        "training or summer safety! Would you like to upgrade?"
    ),
    "training_url": (
        "⚠️ The Premium Training Content package is required to configure training videos. Get "
        "6 custom training video slots (1 minute each) - perfect for annual training or summer "
        "safety! Would you like to upgrade?"
    ),
    "custom_video": (
        "⚠️ Adding custom videos to your library is a premium feature. Please upgrade to a paid "
        "plan to add custom video content."
    ),
}

COLLABORATION_NOTICE = "🤝 Consulting with {names}..."

Handler = Callable[[str, ResolverState], Action | None]


@dataclass(frozen=True)
class IntentRule:
    """One step of the priority chain."""

    name: str
    handler: Handler


def _paywall(feature: str) -> PaywallAction:
    return PaywallAction(text=PAYWALLS[feature], context=PAYWALL_CONTEXT, feature=feature)


def _has_premium_tier(state: ResolverState) -> bool:
    return state.tier.is_paid


def _has_training_package(state: ResolverState) -> bool:
    return state.has_training_package


class IntentResolver:
    """Map one chat message to exactly one Action.

    Example:
        >>> resolver = IntentResolver()
        >>> resolver.resolve("hello").kind
        'fallback'
    """

    def __init__(self, patterns: PatternLibrary | None = None):
        self._patterns = patterns or PatternLibrary()
        self._rules: tuple[IntentRule, ...] = (
            IntentRule("news", self._service_rule(PatternCategory.NEWS)),
            IntentRule("library", self._service_rule(PatternCategory.LIBRARY)),
            IntentRule("video", self._service_rule(PatternCategory.VIDEO)),
            IntentRule("calendar", self._service_rule(PatternCategory.CALENDAR)),
            IntentRule("subscriber_email", self._subscriber_email),
            IntentRule("enable_training_package", self._enable_training_package),
            IntentRule(
                "persona_upload",
                self._upload_rule(PatternCategory.PERSONA_UPLOAD, _has_premium_tier),
            ),
            IntentRule(
                "persona_url",
                self._url_rule(PatternCategory.PERSONA_URL, _has_premium_tier),
            ),
            IntentRule(
                "training_upload",
                self._upload_rule(PatternCategory.TRAINING_UPLOAD, _has_training_package),
            ),
            IntentRule(
                "training_url",
                self._url_rule(PatternCategory.TRAINING_URL, _has_training_package),
            ),
            IntentRule("custom_video", self._custom_video),
            IntentRule("leader_question", self._leader_question),
            IntentRule("agile_framework", self._agile_framework),
            IntentRule("multi_agent", self._multi_agent),
            IntentRule("keyword_topic", self._keyword_topic),
            IntentRule("fallback", self._fallback),
        )

    @property
    def rules(self) -> tuple[IntentRule, ...]:
        return self._rules

    @property
    def rule_names(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self._rules)

    def resolve(self, text: str, state: ResolverState | None = None) -> Action:
        """Resolve a message to an Action."""
        return self.explain(text, state)[1]

    def explain(self, text: str, state: ResolverState | None = None) -> tuple[str, Action]:
        """Resolve a message and report which rule produced the Action."""
        state = state or ResolverState()
        for rule in self._rules:
            action = rule.handler(text, state)
            if action is not None:
                logger.debug("Resolved %r via rule %s -> %s", text, rule.name, action.kind)
                return rule.name, action
        # The fallback rule always matches
        raise AssertionError("intent chain ended without a fallback")

    # Configuration rules

    def _service_rule(self, category: PatternCategory) -> Handler:
        def handler(text: str, state: ResolverState) -> Action | None:
            extracted = self._patterns.match(category, text)
            if extracted is None or extracted.record is None:
                return None
            config_category = ConfigCategory(category.value)
            record: ConfigurationRecord = extracted.record
            return ConfigAction(
                text=_CONFIRMATIONS[config_category].format(name=record.name, url=record.url),
                context=CONFIGURATION_CONTEXT,
                category=config_category,
                record=record,
            )

        return handler

    def _subscriber_email(self, text: str, state: ResolverState) -> Action | None:
        extracted = self._patterns.match(PatternCategory.SUBSCRIBER_EMAIL, text)
        if extracted is None:
            return None
        return SubscriberEmailAction(
            text=SUBSCRIBER_EMAIL_CONFIRMATION.format(email=extracted.value),
            context=CONFIGURATION_CONTEXT,
            email=extracted.value,
        )

    def _enable_training_package(self, text: str, state: ResolverState) -> Action | None:
        if self._patterns.match(PatternCategory.TRAINING_PACKAGE, text) is None:
            return None
        return EnableTrainingPackageAction(
            text=TRAINING_PACKAGE_CONFIRMATION, context="Training Package"
        )

    def _upload_rule(
        self, category: PatternCategory, allowed: Callable[[ResolverState], bool]
    ) -> Handler:
        def handler(text: str, state: ResolverState) -> Action | None:
            extracted = self._patterns.match(category, text)
            if extracted is None or extracted.slot is None:
                return None
            if not allowed(state):
                return _paywall(category.value)
            target = SLOT_TARGETS[category]
            return VideoUploadAction(
                text=UPLOAD_PROMPTS[target].format(slot=extracted.slot + 1),
                context=UPLOAD_CONTEXTS[target],
                target=target,
                slot=extracted.slot,
            )

        return handler

    def _url_rule(
        self, category: PatternCategory, allowed: Callable[[ResolverState], bool]
    ) -> Handler:
        def handler(text: str, state: ResolverState) -> Action | None:
            extracted = self._patterns.match(category, text)
            if extracted is None or extracted.slot is None:
                return None
            if not allowed(state):
                return _paywall(category.value)
            target = SLOT_TARGETS[category]
            return VideoUrlAction(
                text=URL_CONFIRMATIONS[target].format(slot=extracted.slot + 1),
                context=URL_CONTEXTS[target],
                target=target,
                slot=extracted.slot,
                url=extracted.value,
            )

        return handler

    def _custom_video(self, text: str, state: ResolverState) -> Action | None:
        extracted = self._patterns.match(PatternCategory.CUSTOM_VIDEO, text)
        if extracted is None:
            return None
        if not _has_premium_tier(state):
            return _paywall("custom_video")
        return CustomVideoAction(
            text=CUSTOM_VIDEO_CONFIRMATION, context="Video Library", url=extracted.value
        )

    # Free-text rules

    @staticmethod
    def _leader_question(text: str, state: ResolverState) -> Action | None:
        lowered = text.lower()
        if "leader" in lowered and "question" in lowered:
            return TopicAction(text=LEADER_QUESTION_RESPONSE, context="Leadership", topic="Leadership")
        return None

    @staticmethod
    def _agile_framework(text: str, state: ResolverState) -> Action | None:
        lowered = text.lower()
        if "framework" in lowered or "agile" in lowered:
            return TopicAction(
                text=AGILE_RESPONSE, context="Agile/Frameworks", topic="Agile/Frameworks"
            )
        return None

    @staticmethod
    def _multi_agent(text: str, state: ResolverState) -> Action | None:
        lowered = text.lower()
        if not any(trigger in lowered for trigger in MULTI_AGENT_TRIGGERS):
            return None
        names = tuple(agent.name for agent in select_agents(text))
        return CollaborationAction(
            text=COLLABORATION_NOTICE.format(names=", ".join(names)),
            context=COLLABORATION_CONTEXT,
            query=text,
            specialists=names,
        )

    @staticmethod
    def _keyword_topic(text: str, state: ResolverState) -> Action | None:
        topic = detect_keyword_topic(text)
        if topic is None:
            return None
        return TopicAction(text=lookup(topic), context=topic, topic=topic)

    @staticmethod
    def _fallback(text: str, state: ResolverState) -> Action:
        return FallbackAction(text=FALLBACK_RESPONSE)
