"""Collaboration sequencer.

Hidden design decisions:
- The two timed phases (consult, then synthesize) and their delays
- The canned specialist answer and the closing synthesis sentence
- Cancellation: a cancelled run returns to idle and re-raises

State machine: IDLE -> COLLABORATING -> SYNTHESIZED -> IDLE.
"""

import asyncio
import logging
from collections.abc import Callable, Sequence

from .models import CollaboratingAgent, SequencerState, Synthesis
from .roster import select_agents

logger = logging.getLogger(__name__)

DEFAULT_CONSULT_DELAY = 3.0
DEFAULT_SYNTHESIS_DELAY = 2.0

UpdateCallback = Callable[[SequencerState, tuple[CollaboratingAgent, ...]], None]


def specialist_response(specialty: str) -> str:
    return (
        f"Based on {specialty.lower()} best practices, I recommend a comprehensive approach "
        "focusing on measurable outcomes and stakeholder alignment."
    )


def synthesize(query: str, agents: Sequence[CollaboratingAgent]) -> str:
    """Build the assistant message that closes a consultation."""
    names = ", ".join(agent.name for agent in agents)
    answers = "\n\n".join(
        f"**{agent.name}** ({agent.specialty}):\n{agent.response}" for agent in agents
    )
    balance = "regulatory requirements" if "compliance" in query.lower() else "operational needs"
    return (
        "🤝 **Multi-Agent Collaboration Complete**\n\n"
        f"I've consulted with {names} to provide you with comprehensive guidance.\n\n"
        f"{answers}\n\n"
        "**ORA's Synthesis:**\n"
        "Based on input from our specialist agents, I recommend taking a coordinated approach "
        f"that balances {balance} with practical implementation. Would you like me to break "
        "down specific next steps?"
    )


class CollaborationSequencer:
    """Runs one simulated consultation at a time.

    Example:
        >>> sequencer = CollaborationSequencer(consult_delay=0, synthesis_delay=0)
        >>> synthesis = await sequencer.run("Is our budget compliant?")
        >>> [a.name for a in synthesis.agents]
        ['Legal Advisor', 'Financial Analyst']
    """

    def __init__(
        self,
        consult_delay: float = DEFAULT_CONSULT_DELAY,
        synthesis_delay: float = DEFAULT_SYNTHESIS_DELAY,
    ):
        self.consult_delay = consult_delay
        self.synthesis_delay = synthesis_delay
        self._state = SequencerState.IDLE
        self._agents: tuple[CollaboratingAgent, ...] = ()

    @property
    def state(self) -> SequencerState:
        return self._state

    @property
    def agents(self) -> tuple[CollaboratingAgent, ...]:
        """Agents of the consultation in progress (empty when idle)."""
        return self._agents

    async def run(self, query: str, on_update: UpdateCallback | None = None) -> Synthesis:
        """Consult the specialists for ``query`` and return the synthesis.

        Raises:
            RuntimeError: If a consultation is already running
        """
        if self._state is not SequencerState.IDLE:
            raise RuntimeError("A collaboration is already in progress")

        try:
            self._transition(SequencerState.COLLABORATING, tuple(select_agents(query)), on_update)
            logger.info(
                "Consulting %s", ", ".join(agent.name for agent in self._agents)
            )

            await asyncio.sleep(self.consult_delay)
            completed = tuple(
                agent.complete(specialist_response(agent.specialty)) for agent in self._agents
            )
            self._transition(SequencerState.COLLABORATING, completed, on_update)

            await asyncio.sleep(self.synthesis_delay)
            synthesis = Synthesis(query=query, content=synthesize(query, completed), agents=completed)
            self._transition(SequencerState.SYNTHESIZED, completed, on_update)
            return synthesis
        except asyncio.CancelledError:
            logger.debug("Collaboration cancelled")
            raise
        finally:
            self._state = SequencerState.IDLE
            self._agents = ()

    def _transition(
        self,
        state: SequencerState,
        agents: tuple[CollaboratingAgent, ...],
        on_update: UpdateCallback | None,
    ) -> None:
        self._state = state
        self._agents = agents
        if on_update is not None:
            on_update(state, agents)
