"""Which specialists are consulted for a question.

Each specialist is picked by a keyword pattern; they are consulted in roster
order, and the Data Scientist answers alone when nobody else is picked.
"""

import re
from dataclasses import dataclass

from .models import CollaboratingAgent

# Any of these in the lowercased message starts a consultation.
MULTI_AGENT_TRIGGERS: tuple[str, ...] = (
    "compliance",
    "legal",
    "budget",
    "hiring",
    "multi-agent",
    "collaborate",
)


@dataclass(frozen=True)
class Specialist:
    name: str
    avatar: str
    specialty: str
    pattern: re.Pattern[str] | None = None

    def agent(self) -> CollaboratingAgent:
        return CollaboratingAgent(name=self.name, avatar=self.avatar, specialty=self.specialty)


ROSTER: tuple[Specialist, ...] = (
    Specialist("Legal Advisor", "⚖️", "Corporate Law & Compliance", re.compile(r"legal|compliance")),
    Specialist("Financial Analyst", "💰", "Finance & Strategy", re.compile(r"budget|financial")),
    # "hr" only as a word, so "three" or "through" do not pull in HR
    Specialist("HR Strategist", "👥", "Human Resources & Talent", re.compile(r"hiring|\bhr\b")),
)

DEFAULT_SPECIALIST = Specialist("Data Scientist", "📊", "Analytics & Insights")


def select_agents(query: str) -> list[CollaboratingAgent]:
    """Specialists for a query, in roster order, all still thinking."""
    query_lower = query.lower()
    agents = [s.agent() for s in ROSTER if s.pattern and s.pattern.search(query_lower)]
    return agents or [DEFAULT_SPECIALIST.agent()]
