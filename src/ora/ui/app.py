"""Main Textual TUI application.

Hosts an AgentPanel: forwards typed messages and pill clicks to it and renders
the events it publishes.
"""

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.widgets import Footer, Header

from ..agent import (
    AgentPanel,
    CollaborationProgress,
    ConsentRequired,
    FeedbackChanged,
    LinkOpened,
    MessageAdded,
    PanelEvent,
    VideoSelected,
)
from ..conversation import Feedback, Message, MessageRole
from .config import WELCOME_MESSAGE, LogLevel
from .screens import AgreementScreen
from .styles import APP_CSS
from .themes import ORA_NIGHT
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    CollaborationStatus,
    DebugPanel,
    DebugPanelHandler,
    PillBar,
    VideoPanel,
)

ORA_LOGGER = "ora"


class OraChatApp(App):
    """Textual TUI for the ORA chat panel."""

    CSS = APP_CSS
    TITLE = "ORA"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+d", "toggle_debug", "Debug", priority=True),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("ctrl+t", "feedback('up')", "👍", priority=True),
        Binding("ctrl+b", "feedback('down')", "👎", priority=True),
    ]

    def __init__(self, panel: AgentPanel, log_level: str | None = None) -> None:
        super().__init__()
        self._panel = panel
        self._log_level = log_level
        self._log_handler: DebugPanelHandler | None = None
        self._agreement_open = False
        self._listening = False

    @property
    def panel(self) -> AgentPanel:
        return self._panel

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        yield ChatHistoryWidget(id="chat-history")

        with Vertical(id="right-panel"):
            yield VideoPanel(id="video-panel")
            yield CollaborationStatus(id="collaboration-status")
            yield DebugPanel(id="debug-panel")

        with Vertical(id="bottom-bar"):
            yield PillBar(id="pill-bar")
            yield ChatInputBar(id="chat-input-bar")

        yield Footer()

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(ORA_NIGHT)
        self.theme = "ora-night"

        log_panel = self.query_one("#debug-panel", DebugPanel)
        self._log_handler = DebugPanelHandler(log_panel)
        logging.getLogger(ORA_LOGGER).addHandler(self._log_handler)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.write_entry(
                "TUI", f"Log panel enabled with level: {self._log_level.upper()}", LogLevel.INFO
            )

        if not self._panel.is_open:
            await self._panel.open()
        self._panel.add_listener(self._on_panel_event)
        self._listening = True

        config = self._panel.configuration
        self.sub_title = f"{config.tier.value} | {self._panel.store.backend_type}"
        self.query_one("#video-panel", VideoPanel).show_video(self._panel.rotation.current)

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.add_message(Message(role=MessageRole.ASSISTANT, content=WELCOME_MESSAGE))
        for message in self._panel.messages:
            chat.add_message(message)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Detach from the panel; closing it is left to the owner."""
        if self._log_handler is not None:
            logging.getLogger(ORA_LOGGER).removeHandler(self._log_handler)
            self._log_handler = None
        if self._listening:
            self._panel.remove_listener(self._on_panel_event)
            self._listening = False

    async def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        await self._panel.send(event.value)

    async def on_pill_bar_pressed(self, event: PillBar.Pressed) -> None:
        await self._panel.click_pill(event.category)

    def _on_panel_event(self, event: PanelEvent) -> None:
        """Render an event published by the panel."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        if isinstance(event, MessageAdded):
            chat.add_message(event.message)
        elif isinstance(event, FeedbackChanged):
            chat.update_feedback(event.message)
        elif isinstance(event, CollaborationProgress):
            self.query_one("#collaboration-status", CollaborationStatus).show_progress(
                event.state, event.agents
            )
        elif isinstance(event, VideoSelected):
            self.query_one("#video-panel", VideoPanel).show_video(event.url)
        elif isinstance(event, LinkOpened):
            self.notify(f"Opening {event.name}: {event.url}", timeout=5)
        elif isinstance(event, ConsentRequired):
            self._ask_for_agreement(event.question_count)

    def _ask_for_agreement(self, question_count: int) -> None:
        if self._agreement_open:
            return
        self._agreement_open = True

        async def on_choice(choice: str | None) -> None:
            self._agreement_open = False
            if choice in ("accept", "share"):
                await self._panel.accept_agreement(data_consent=choice == "share")
                self.notify("Agreement accepted", timeout=2)

        self.push_screen(AgreementScreen(question_count), on_choice)

    async def action_feedback(self, value: str) -> None:
        """Rate the latest assistant reply."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        message = chat.last_assistant_message()
        if message is None or not await self._panel.give_feedback(
            message.id, Feedback.parse(value)
        ):
            self.notify("No reply to rate", severity="warning", timeout=2)

    def action_clear_chat(self) -> None:
        """Clear the chat history display."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.clear_history()
        self.notify("Chat cleared", timeout=2)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(panel: AgentPanel, log_level: str | None = None) -> None:
    """Run the Textual TUI.

    Args:
        panel: Agent panel to host; opened if needed and closed on exit
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = OraChatApp(panel=panel, log_level=log_level)
    try:
        await app.run_async()
    finally:
        await panel.close()
