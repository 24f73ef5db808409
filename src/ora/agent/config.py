"""Agent panel configuration constants.

Centralizes reply delays, defaults and limits for the agent module.
"""

from pydantic import BaseModel, Field

from ..intents import ConfigCategory, ConfigurationRecord


class ResponseDelays(BaseModel):
    """Simulated typing delays, in seconds."""

    configuration: float = Field(
        default=0.8, ge=0, description="Configuration confirmations and paywalls"
    )
    upload_prompt: float = Field(default=0.5, ge=0)
    keyword: float = Field(default=0.8, ge=0, description="Leader and agile replies")
    topic: float = Field(default=1.0, ge=0)
    fallback: float = Field(default=1.5, ge=0)
    follow_up: float = Field(default=5.0, ge=0, description="Extra message after a pill reply")
    consult: float = Field(default=3.0, ge=0)
    synthesis: float = Field(default=2.0, ge=0)
    upload_result: float = Field(default=0.8, ge=0)
    upload_warning: float = Field(default=0.5, ge=0)

    @classmethod
    def instant(cls) -> "ResponseDelays":
        """All delays zero (tests, ``ORA_FAST``)."""
        return cls(**{name: 0.0 for name in cls.model_fields})


# Questions a user may ask before the data agreement is required
QUESTION_LIMIT = 10

# Written on first open when nothing is configured; library stays unset
DEFAULT_CONFIGURATION: dict[ConfigCategory, ConfigurationRecord] = {
    ConfigCategory.NEWS: ConfigurationRecord(
        name="War on the Rocks", url="https://warontherocks.com/?utm_source=copilot.com"
    ),
    ConfigCategory.VIDEO: ConfigurationRecord(name="FaceTime", url="facetime://"),
    ConfigCategory.CALENDAR: ConfigurationRecord(name="Calendly", url="https://calendly.com/"),
}

NEWS_PILL = "News"

INVALID_UPLOAD_MESSAGE = "⚠️ Please upload a valid video file (MP4, MOV, WebM, etc.)"
NO_PENDING_UPLOAD_MESSAGE = (
    "⚠️ No video slot is waiting for a file. Ask to upload a persona or training video first."
)
PERSONA_UPLOAD_SUCCESS = (
    "✅ Local video uploaded successfully to Persona slot {slot}! Your video ({size_mb:.2f}MB) "
    "has been stored locally and will play first when you open the agent."
)
TRAINING_UPLOAD_SUCCESS = (
    "✅ Training video {slot} uploaded successfully! Your training video ({size_mb:.2f}MB, "
    "~1 min) is ready. These videos will play first when you tap the Training button."
)
