"""Video selection for the panel's avatar player.

Persona videos play first, then custom library videos, then the built-in
rotation. Topics with a dedicated video always play it; the Training pill
cycles through training videos while the training package is active.
"""

import logging

from ..store import KeyValueStore, StoreKey

logger = logging.getLogger(__name__)

VIDEO_BASE_URL = (
    "https://naskxuojfdqcunotdjzi.supabase.co/storage/v1/object/public/make-3504d096-videos/"
)

DEFAULT_VIDEO = f"{VIDEO_BASE_URL}AgileMike.mp4"

DEFAULT_ROTATION: tuple[str, ...] = tuple(
    f"{VIDEO_BASE_URL}{name}"
    for name in (
        "AgileMike.mp4",
        "USMCWentlang.mp4",
        "CWO-John2026.mp4",
        "Process-Citrus.mp4",
        "AI_Literacy_GovBriefpart2.mp4",
        "MIT-Arnold.mp4",
        "KleeKaren2.mp4",
        "Failures1.mp4",
        "Validation1.mp4",
        "Big3Risk-RACI-Governance.mp4",
        "NC4ME2.mp4",
    )
)

TOPIC_VIDEOS: dict[str, str] = {
    "Applied AI for Transformation": f"{VIDEO_BASE_URL}MIT_Arnold.mp4",
    "Human Health & Fitness": f"{VIDEO_BASE_URL}KleeKaren2.mp4",
    "Human Health": f"{VIDEO_BASE_URL}KleeKaren2.mp4",
    "USMC Knowledge Management": f"{VIDEO_BASE_URL}CWO-John2026.mp4",
    "Frameworks for Innovation": f"{VIDEO_BASE_URL}AgileMike.mp4",
    "AI Blind Spots & Pitfalls": f"{VIDEO_BASE_URL}Big3Risk-RACI-Governance.mp4",
    "Governance & Workforce Readiness": f"{VIDEO_BASE_URL}SSgtW.mp4",
    "Training": f"{VIDEO_BASE_URL}Process-Citrus.mp4",
}

TRAINING_PILL = "Training"


class VideoRotation:
    """Picks the next video and remembers what played last."""

    def __init__(
        self,
        store: KeyValueStore,
        persona_urls: list[str] | None = None,
        custom_urls: list[str] | None = None,
        training_urls: list[str] | None = None,
        has_training_package: bool = False,
    ):
        self._store = store
        self.persona_urls = list(persona_urls or [])
        self.custom_urls = list(custom_urls or [])
        self.training_urls = list(training_urls or [])
        self.has_training_package = has_training_package
        self.current: str = DEFAULT_VIDEO

    @property
    def combined(self) -> list[str]:
        """Playback order: persona, custom, then the built-in rotation."""
        return [*self.persona_urls, *self.custom_urls, *DEFAULT_ROTATION]

    async def restore(self) -> str:
        """Resume from the last played video, if any."""
        last = await self._store.get(StoreKey.LAST_PLAYED_VIDEO)
        if isinstance(last, str) and last:
            self.current = last
        return self.current

    async def for_category(self, category: str) -> str:
        """Video to play when a pill button is clicked."""
        if category == TRAINING_PILL and self.has_training_package and self.training_urls:
            last = await self._store.get(StoreKey.LAST_PLAYED_TRAINING_INDEX, -1)
            index = (last + 1 if isinstance(last, int) else 0) % len(self.training_urls)
            await self._store.set(StoreKey.LAST_PLAYED_TRAINING_INDEX, index)
            video = self.training_urls[index]
        elif category in TOPIC_VIDEOS:
            video = TOPIC_VIDEOS[category]
        else:
            video = self._after(self.current)
        return await self._play(video)

    async def next(self) -> str:
        """Advance the rotation, skipping the last played video when possible."""
        last = await self._store.get(StoreKey.LAST_PLAYED_VIDEO)
        rotation = self.combined
        index = (self._index(self.current) + 1) % len(rotation)
        if rotation[index] == last and len(rotation) > 1:
            index = (index + 1) % len(rotation)
        return await self._play(rotation[index])

    def _index(self, video: str) -> int:
        try:
            return self.combined.index(video)
        except ValueError:
            return -1

    def _after(self, video: str) -> str:
        rotation = self.combined
        return rotation[(self._index(video) + 1) % len(rotation)]

    async def _play(self, video: str) -> str:
        self.current = video
        await self._store.set(StoreKey.LAST_PLAYED_VIDEO, video)
        logger.debug("Now playing %s", video)
        return video
