"""Data models for the simulated multi-agent consultation."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AgentStatus(str, Enum):
    """Progress of one consulted specialist."""

    THINKING = "thinking"
    COMPLETE = "complete"
    WAITING = "waiting"


class SequencerState(str, Enum):
    """Lifecycle of a consultation."""

    IDLE = "idle"
    COLLABORATING = "collaborating"
    SYNTHESIZED = "synthesized"


class CollaboratingAgent(BaseModel):
    """A specialist taking part in a consultation."""

    model_config = ConfigDict(frozen=True)

    name: str
    avatar: str
    specialty: str
    status: AgentStatus = AgentStatus.THINKING
    response: str | None = None

    def complete(self, response: str) -> "CollaboratingAgent":
        return self.model_copy(update={"status": AgentStatus.COMPLETE, "response": response})


class Synthesis(BaseModel):
    """The combined reply produced once every specialist has answered."""

    model_config = ConfigDict(frozen=True)

    query: str
    content: str = Field(description="Assistant message text naming every agent")
    agents: tuple[CollaboratingAgent, ...]
