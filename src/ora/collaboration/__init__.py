"""Simulated multi-agent consultation."""

from .models import AgentStatus, CollaboratingAgent, SequencerState, Synthesis
from .roster import MULTI_AGENT_TRIGGERS, ROSTER, select_agents
from .sequencer import CollaborationSequencer, specialist_response, synthesize

__all__ = [
    "AgentStatus",
    "CollaboratingAgent",
    "CollaborationSequencer",
    "MULTI_AGENT_TRIGGERS",
    "ROSTER",
    "SequencerState",
    "Synthesis",
    "select_agents",
    "specialist_response",
    "synthesize",
]
