"""Intent resolution for chat messages.

Pattern library, topic table and the prioritised resolver that turns a
message into exactly one Action.
"""

from .models import (
    CONFIGURATION_KINDS,
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
    UserTier,
    VideoTarget,
    VideoUploadAction,
    VideoUrlAction,
)
from .patterns import ExtractedValue, PatternCategory, PatternLibrary, PatternRule
from .resolver import IntentResolver, IntentRule
from .topics import FALLBACK_RESPONSE, detect_keyword_topic, lookup

__all__ = [
    "Action",
    "CONFIGURATION_KINDS",
    "CollaborationAction",
    "ConfigAction",
    "ConfigCategory",
    "ConfigurationRecord",
    "CustomVideoAction",
    "EnableTrainingPackageAction",
    "ExtractedValue",
    "FALLBACK_RESPONSE",
    "FallbackAction",
    "IntentResolver",
    "IntentRule",
    "PatternCategory",
    "PatternLibrary",
    "PatternRule",
    "PaywallAction",
    "ResolverState",
    "SubscriberEmailAction",
    "TopicAction",
    "UserTier",
    "VideoTarget",
    "VideoUploadAction",
    "VideoUrlAction",
    "detect_keyword_topic",
    "lookup",
]
