"""Provider factory functions for CLI.

Centralizes creation of stores, delays and the agent panel from environment variables.
Hides configuration details from command implementations.
"""

import logging
import os

from rich.logging import RichHandler

from ..agent import AgentPanel, ResponseDelays
from ..store import KeyValueStore, VideoStore, create_key_value_store, create_video_store

DEFAULT_STORE_BACKEND = "sqlite"
DEFAULT_STORE_PATH = "./ora_state.db"
DEFAULT_LOG_LEVEL = "warning"


def _store_settings() -> tuple[str, dict[str, str]]:
    backend = os.getenv("ORA_STORE_BACKEND", DEFAULT_STORE_BACKEND).lower()
    if backend == "sqlite":
        return backend, {"path": os.getenv("ORA_STORE_PATH", DEFAULT_STORE_PATH)}
    return backend, {}


def get_store() -> KeyValueStore:
    """Create the key/value store from environment variables.

    Environment variables:
        ORA_STORE_BACKEND: "sqlite" (default) or "memory"
        ORA_STORE_PATH: SQLite database file (default: ./ora_state.db)
    """
    backend, config = _store_settings()
    return create_key_value_store(backend, **config)


def get_video_store() -> VideoStore:
    """Create the video store; shares the key/value store's database file."""
    backend, config = _store_settings()
    return create_video_store(backend, **config)


def get_delays(fast: bool | None = None) -> ResponseDelays:
    """Reply delays; zero when ``fast`` or ORA_FAST is set."""
    if fast is None:
        fast = os.getenv("ORA_FAST", "").lower() in ("1", "true", "yes")
    return ResponseDelays.instant() if fast else ResponseDelays()


def get_panel(fast: bool | None = None) -> AgentPanel:
    """Create an (unopened) agent panel over the configured stores."""
    return AgentPanel(get_store(), get_video_store(), delays=get_delays(fast))


def get_log_level(log_level: str | None = None) -> str:
    """Log level from the option, else ORA_LOG_LEVEL (default: warning)."""
    return (log_level or os.getenv("ORA_LOG_LEVEL", DEFAULT_LOG_LEVEL)).lower()


def configure_logging(log_level: str | None = None, *, console: bool = True) -> None:
    """Set the ``ora`` logger level and, unless ``console`` is False, print through rich.

    The TUI passes ``console=False``; it shows records in its own log panel.
    """
    level = getattr(logging, get_log_level(log_level).upper(), logging.WARNING)
    logger = logging.getLogger("ora")
    logger.setLevel(level)
    if console and not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(show_path=False, rich_tracebacks=True))
