"""Loading and saving the panel's persisted configuration.

Hidden design decisions:
- Which store key holds each configuration record
- Defaults written on first open
- How slot-indexed URL lists are updated (place at slot, then compact)
"""

import logging

from pydantic import BaseModel, Field

from ..intents import ConfigCategory, ConfigurationRecord, ResolverState, UserTier, VideoTarget
from ..store import KeyValueStore, StoreKey, VideoStore
from .config import DEFAULT_CONFIGURATION

logger = logging.getLogger(__name__)

CATEGORY_KEYS: dict[ConfigCategory, str] = {
    ConfigCategory.NEWS: StoreKey.CONFIGURED_NEWS_SOURCE,
    ConfigCategory.LIBRARY: StoreKey.CONFIGURED_LIBRARY,
    ConfigCategory.VIDEO: StoreKey.CONFIGURED_VIDEO,
    ConfigCategory.CALENDAR: StoreKey.CONFIGURED_CALENDAR,
}

SLOT_LIST_KEYS: dict[VideoTarget, str] = {
    VideoTarget.PERSONA: StoreKey.PERSONA_VIDEO_URLS,
    VideoTarget.TRAINING: StoreKey.TRAINING_VIDEO_URLS,
}


class PanelConfiguration(BaseModel):
    """Everything the panel reads back when it opens."""

    news: ConfigurationRecord | None = None
    library: ConfigurationRecord | None = None
    video: ConfigurationRecord | None = None
    calendar: ConfigurationRecord | None = None
    subscriber_email: str = ""
    persona_video_urls: list[str] = Field(default_factory=list)
    custom_video_urls: list[str] = Field(default_factory=list)
    training_video_urls: list[str] = Field(default_factory=list)
    has_training_package: bool = False
    tier: UserTier = UserTier.FREE
    user_status: str | None = None

    def record(self, category: ConfigCategory) -> ConfigurationRecord | None:
        return getattr(self, category.value)

    def slot_urls(self, target: VideoTarget) -> list[str]:
        if target is VideoTarget.PERSONA:
            return self.persona_video_urls
        return self.training_video_urls

    @property
    def resolver_state(self) -> ResolverState:
        return ResolverState(tier=self.tier, has_training_package=self.has_training_package)


def place_in_slot(urls: list[str], slot: int, url: str) -> list[str]:
    """Put ``url`` at ``slot`` and drop empty entries.

    Compacting means slot numbers address positions in the list as it is
    now, not fixed positions.
    """
    updated = list(urls)
    if slot >= len(updated):
        updated.extend([""] * (slot + 1 - len(updated)))
    updated[slot] = url
    return [u for u in updated if u]


async def load_configuration(
    store: KeyValueStore,
    video_store: VideoStore | None = None,
) -> PanelConfiguration:
    """Read the stored configuration, writing defaults for missing records."""
    records: dict[str, ConfigurationRecord | None] = {}
    for category, key in CATEGORY_KEYS.items():
        record = await store.get_model(key, ConfigurationRecord)
        if record is None and category in DEFAULT_CONFIGURATION:
            record = DEFAULT_CONFIGURATION[category]
            await store.set_model(key, record)
            logger.info("Using default %s configuration: %s", category.value, record.name)
        records[category.value] = record

    email = await store.get(StoreKey.SUBSCRIBER_EMAIL, "")
    package = await store.get(StoreKey.HAS_TRAINING_PACKAGE, False)
    status = await store.get(StoreKey.USER_STATUS)

    persona_urls = await store.get_str_list(StoreKey.PERSONA_VIDEO_URLS)
    if video_store is not None:
        # Stored uploads play before URL-configured persona videos
        local = [blob.reference for blob in await video_store.get_all(VideoTarget.PERSONA.value)]
        persona_urls = local + [url for url in persona_urls if url not in local]

    return PanelConfiguration(
        **records,
        subscriber_email=email if isinstance(email, str) else "",
        persona_video_urls=persona_urls,
        custom_video_urls=await store.get_str_list(StoreKey.CUSTOM_VIDEO_URLS),
        training_video_urls=await store.get_str_list(StoreKey.TRAINING_VIDEO_URLS),
        has_training_package=package is True or package == "true",
        tier=UserTier.parse(await store.get(StoreKey.USER_TIER)),
        user_status=status if isinstance(status, str) else None,
    )


async def read_resolver_state(store: KeyValueStore) -> ResolverState:
    """Read tier and training package without writing defaults."""
    package = await store.get(StoreKey.HAS_TRAINING_PACKAGE, False)
    return ResolverState(
        tier=UserTier.parse(await store.get(StoreKey.USER_TIER)),
        has_training_package=package is True or package == "true",
    )


async def save_record(
    store: KeyValueStore, category: ConfigCategory, record: ConfigurationRecord
) -> None:
    """Overwrite the single record kept for a category."""
    await store.set_model(CATEGORY_KEYS[category], record)


async def save_tier(store: KeyValueStore, tier: UserTier) -> None:
    await store.set(StoreKey.USER_TIER, tier.value)
