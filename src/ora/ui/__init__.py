"""Terminal UI module for ora.

Provides a Textual-based chat panel hosting an AgentPanel.

Module structure (Parnas principle - each module hides a design decision):
- config.py: Display constants and log levels
- widgets.py: Custom widgets (chat history, pills, input history, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- screens.py: Modal dialogs (user agreement)
- app.py: Application orchestration (user interaction flow)
"""

from .app import OraChatApp, run_textual_tui
from .config import LogLevel
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, PillBar

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "LogLevel",
    "OraChatApp",
    "PillBar",
    "run_textual_tui",
]
