"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input history management
- Chat message rendering and feedback marks
- Collaboration progress display
- Log rendering and level filtering
"""

import logging
from datetime import datetime

from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message as TextualMessage
from textual.widgets import Button, Input, RichLog, Static

from ..collaboration import AgentStatus, CollaboratingAgent, SequencerState
from ..conversation import Message
from ..intents.topics import PILL_BUTTONS
from .config import (
    ASSISTANT_NAME,
    FEEDBACK_MARKS,
    INPUT_HISTORY_MAX_SIZE,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    MESSAGE_TIMESTAMP_FORMAT,
    LogLevel,
)


class HistoryInput(Input):
    """Input widget with command history support.

    Use Up/Down arrow keys to navigate through history.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._history: list[str] = []
        self._history_index: int = -1
        self._current_input: str = ""

    def _on_key(self, event) -> None:
        """Handle key events for history navigation."""
        if event.key == "up":
            if self._history:
                if self._history_index == -1:
                    self._current_input = self.value
                    self._history_index = len(self._history) - 1
                elif self._history_index > 0:
                    self._history_index -= 1
                self.value = self._history[self._history_index]
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()
        elif event.key == "down":
            if self._history_index != -1:
                if self._history_index < len(self._history) - 1:
                    self._history_index += 1
                    self.value = self._history[self._history_index]
                else:
                    self._history_index = -1
                    self.value = self._current_input
                self.cursor_position = len(self.value)
            event.prevent_default()
            event.stop()

    def add_to_history(self, command: str) -> None:
        """Add a command to history, skipping immediate repeats."""
        if command and (not self._history or self._history[-1] != command):
            self._history.append(command)
            del self._history[:-INPUT_HISTORY_MAX_SIZE]
        self._history_index = -1
        self._current_input = ""


class ChatInputBar(Horizontal):
    """Chat input bar with a single-line input and Send button."""

    class Submitted(TextualMessage):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        yield HistoryInput(placeholder="Message ORA...", id="chat-input")
        yield Button("Send", id="send-btn", variant="success")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def _submit(self) -> None:
        text_input = self.query_one("#chat-input", HistoryInput)
        value = text_input.value.strip()
        if value:
            text_input.add_to_history(value)
            text_input.value = ""
            self.post_message(self.Submitted(value))

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", HistoryInput).focus()


class PillBar(Horizontal):
    """Row of topic shortcut buttons."""

    class Pressed(TextualMessage):
        """Message sent when a pill button is clicked."""

        def __init__(self, category: str) -> None:
            super().__init__()
            self.category = category

    def compose(self):
        for category in PILL_BUTTONS:
            yield Button(category, classes="pill", variant="primary").with_tooltip(
                f"Ask ORA about {category}"
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.Pressed(str(event.button.label)))


class ChatHistoryWidget(VerticalScroll):
    """Scrollable chat history keyed by message id."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: dict[str, Message] = {}

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def add_message(self, message: Message) -> None:
        """Add a message to the chat history and scroll to it."""
        self._messages[message.id] = message
        if message.is_assistant:
            classes = "chat-message assistant-message"
            if message.is_multi_agent:
                classes += " multi-agent"
        else:
            classes = "chat-message user-message"

        container = Vertical(id=f"msg-{message.id}", classes=classes)
        container.compose_add_child(
            Static(self._header(message), classes="message-header")
        )
        container.compose_add_child(
            Static(message.content, classes="message-content", markup=False)
        )
        self.mount(container)
        self.border_subtitle = f"{self.message_count} messages"
        self.scroll_end(animate=False)

    def update_feedback(self, message: Message) -> None:
        """Refresh the header of a message after its feedback changed."""
        self._messages[message.id] = message
        container = self.query_one(f"#msg-{message.id}", Vertical)
        container.query_one(".message-header", Static).update(self._header(message))

    def last_assistant_message(self) -> Message | None:
        for message in reversed(list(self._messages.values())):
            if message.is_assistant:
                return message
        return None

    def clear_history(self) -> None:
        """Clear the chat history."""
        self._messages.clear()
        self.remove_children()
        self.border_subtitle = "Conversation history"

    @staticmethod
    def _header(message: Message) -> str:
        timestamp = message.timestamp.strftime(MESSAGE_TIMESTAMP_FORMAT)
        if not message.is_assistant:
            return f"> You [{timestamp}]"
        header = f"< {ASSISTANT_NAME} [{timestamp}]"
        if message.is_multi_agent:
            names = ", ".join(agent.name for agent in message.collaborating_agents)
            header += f" with {names}"
        if message.feedback is not None:
            header += f" {FEEDBACK_MARKS[message.feedback.value]}"
        return header


class VideoPanel(Static):
    """Shows which avatar video is playing."""

    BORDER_TITLE = "Now playing"

    def show_video(self, url: str) -> None:
        self.update(url.rsplit("/", 1)[-1] or url)
        self.border_subtitle = url


class CollaborationStatus(Static):
    """Progress of a multi-agent consultation. Hidden while idle."""

    BORDER_TITLE = "Collaboration"

    _status_marks = {
        AgentStatus.THINKING: "…",
        AgentStatus.WAITING: "·",
        AgentStatus.COMPLETE: "✓",
    }

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.display = False

    def show_progress(
        self, state: SequencerState, agents: tuple[CollaboratingAgent, ...]
    ) -> None:
        if state is SequencerState.IDLE:
            self.display = False
            self.update("")
            return
        lines = [
            f"{agent.avatar} {agent.name} {self._status_marks[agent.status]}"
            for agent in agents
        ]
        if state is SequencerState.SYNTHESIZED:
            lines.append("Synthesizing insights...")
        self.border_subtitle = state.value
        self.update("\n".join(lines))
        self.display = True


class DebugPanel(RichLog):
    """Log panel for real-time tracing with level filtering.

    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+D.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Trace log"

    _level_colors = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level
        # Hidden until shown with --log-level or Ctrl+D
        self.display = False

    @property
    def log_level(self) -> int:
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def write_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> bool:
        """Add a log entry if it meets the current level threshold.

        Returns:
            True if the entry was written
        """
        if level < self._log_level:
            return False
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."

        from rich.markup import escape

        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        level_color = self._level_colors.get(level, "white")
        self.write(
            f"[dim]{timestamp}[/] "
            f"[{level_color}]{LogLevel.name(level):<7}[/] "
            f"[green]\\[{escape(component)}][/] {escape(message)}"
        )
        return True

    def show(self) -> None:
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        self.display = False
        self._update_subtitle()

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True


class DebugPanelHandler(logging.Handler):
    """Mirrors ``ora`` log records into a DebugPanel.

    Records must come from the app's event loop thread.
    """

    def __init__(self, panel: DebugPanel) -> None:
        super().__init__(level=logging.DEBUG)
        self._panel = panel

    def emit(self, record: logging.LogRecord) -> None:
        try:
            component = record.name.rsplit(".", 1)[-1]
            self._panel.write_entry(component, record.getMessage(), record.levelno)
        except Exception:
            self.handleError(record)
