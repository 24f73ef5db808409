"""Pytest configuration and shared fixtures."""
import pytest

from ora.agent import AgentPanel, ResponseDelays
from ora.intents import IntentResolver, ResolverState, UserTier
from ora.store import create_key_value_store, create_video_store


@pytest.fixture
def resolver():
    """Resolver with the default pattern library."""
    return IntentResolver()


@pytest.fixture
def free_state():
    return ResolverState(tier=UserTier.FREE, has_training_package=False)


@pytest.fixture
def premium_state():
    return ResolverState(tier=UserTier.PREMIUM, has_training_package=True)


@pytest.fixture
def memory_store():
    """Unconnected in-memory key/value store."""
    return create_key_value_store("memory")


@pytest.fixture
def panel(memory_store):
    """Unopened agent panel with zero reply delays."""
    return AgentPanel(
        memory_store,
        create_video_store("memory"),
        delays=ResponseDelays.instant(),
    )


@pytest.fixture
def sqlite_path(tmp_path):
    """Path for a throwaway SQLite database."""
    return tmp_path / "ora_state.db"
