"""Tests for the simulated multi-agent consultation."""
import asyncio

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ora.collaboration import (
    AgentStatus,
    CollaborationSequencer,
    SequencerState,
    select_agents,
    specialist_response,
    synthesize,
)


class TestSelectAgents:
    """Tests for specialist selection."""

    def test_roster_order(self):
        """Test that agents come back in roster order, not mention order."""
        names = [a.name for a in select_agents("hiring plan, budget and legal review")]
        assert names == ["Legal Advisor", "Financial Analyst", "HR Strategist"]

    def test_default_specialist(self):
        """Test the Data Scientist default."""
        agents = select_agents("let's collaborate")
        assert [a.name for a in agents] == ["Data Scientist"]
        assert agents[0].avatar == "📊"

    def test_hr_needs_word_boundary(self):
        """Test that "hr" inside a word does not select HR."""
        assert [a.name for a in select_agents("three months through")] == ["Data Scientist"]
        assert [a.name for a in select_agents("ask HR")] == ["HR Strategist"]

    def test_agents_start_thinking(self):
        """Test initial agent status."""
        assert all(a.status is AgentStatus.THINKING for a in select_agents("compliance"))

    @given(st.text(max_size=60))
    def test_between_one_and_three_agents(self, query: str):
        """Property test: every query selects one to three distinct agents."""
        names = [a.name for a in select_agents(query)]
        assert 1 <= len(names) <= 3
        assert len(names) == len(set(names))


class TestSynthesis:
    """Tests for the synthesis text."""

    def test_names_every_agent(self):
        """Test that the synthesis mentions each agent and its answer."""
        agents = [
            a.complete(specialist_response(a.specialty))
            for a in select_agents("legal budget hiring")
        ]
        text = synthesize("legal budget hiring", agents)
        for agent in agents:
            assert agent.name in text
            assert agent.response in text
        assert "operational needs" in text

    def test_compliance_balances_regulation(self):
        """Test the compliance wording of the closing sentence."""
        agents = [a.complete("ok") for a in select_agents("compliance")]
        assert "regulatory requirements" in synthesize("Compliance check", agents)


class TestCollaborationSequencer:
    """Tests for the sequencer state machine."""

    @pytest.mark.asyncio
    async def test_full_run(self):
        """Test the states reported during a consultation."""
        sequencer = CollaborationSequencer(consult_delay=0, synthesis_delay=0)
        updates = []

        synthesis = await sequencer.run(
            "What about our legal budget for hiring?",
            on_update=lambda state, agents: updates.append((state, agents)),
        )

        assert [state for state, _ in updates] == [
            SequencerState.COLLABORATING,
            SequencerState.COLLABORATING,
            SequencerState.SYNTHESIZED,
        ]
        assert all(a.status is AgentStatus.THINKING for a in updates[0][1])
        assert all(a.status is AgentStatus.COMPLETE for a in updates[1][1])
        assert [a.name for a in synthesis.agents] == [
            "Legal Advisor", "Financial Analyst", "HR Strategist",
        ]
        for name in ("Legal Advisor", "Financial Analyst", "HR Strategist"):
            assert name in synthesis.content
        assert sequencer.state is SequencerState.IDLE
        assert sequencer.agents == ()

    @pytest.mark.asyncio
    async def test_one_run_at_a_time(self):
        """Test that a second run while busy is rejected."""
        sequencer = CollaborationSequencer(consult_delay=0.05, synthesis_delay=0)
        first = asyncio.create_task(sequencer.run("budget"))
        await asyncio.sleep(0)
        assert sequencer.state is SequencerState.COLLABORATING

        with pytest.raises(RuntimeError, match="already in progress"):
            await sequencer.run("legal")
        await first

    @pytest.mark.asyncio
    async def test_cancel_returns_to_idle(self):
        """Test that cancellation resets the sequencer."""
        sequencer = CollaborationSequencer(consult_delay=10, synthesis_delay=0)
        task = asyncio.create_task(sequencer.run("budget"))
        await asyncio.sleep(0)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert sequencer.state is SequencerState.IDLE
