"""
ORA: the chat agent of a leadership-training panel.

Rule-based intent routing, canned topic replies, a scripted multi-agent
consultation and locally persisted configuration and logs.

This package follows Parnas's information hiding principles,
where each module hides a specific design decision.
"""

__version__ = "0.1.0"

from .agent import AgentPanel, ResponseDelays, SendReceipt
from .intents import Action, IntentResolver, ResolverState, UserTier
from .store import create_key_value_store, create_video_store

__all__ = [
    "Action",
    "AgentPanel",
    "IntentResolver",
    "ResolverState",
    "ResponseDelays",
    "SendReceipt",
    "UserTier",
    "create_key_value_store",
    "create_video_store",
]
