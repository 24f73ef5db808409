"""Modal screens for the TUI.

This module hides the design decisions about:
- How the user agreement is presented once the free questions are used up
- Keyboard shortcuts for dialogs
"""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Static

AGREEMENT_TEXT = (
    "You have asked {count} questions. To keep chatting with ORA, accept the "
    "user agreement. You may also allow your conversations to be used to "
    "improve ORA."
)


class AgreementScreen(ModalScreen[str]):
    """User agreement dialog.

    Dismisses with ``"share"`` (accept and allow data use), ``"accept"``
    (accept without data use) or ``"later"``.
    """

    BINDINGS = [
        Binding("a", "choose('accept')", "Accept", show=False),
        Binding("s", "choose('share')", "Accept and share", show=False),
        Binding("escape", "choose('later')", "Later", show=False),
    ]

    def __init__(self, question_count: int) -> None:
        super().__init__()
        self._question_count = question_count

    def compose(self) -> ComposeResult:
        with Vertical(id="agreement-dialog"):
            yield Static("User Agreement", id="agreement-title")
            yield Static(AGREEMENT_TEXT.format(count=self._question_count))
            with Horizontal(id="agreement-buttons"):
                yield Button("Accept & share", id="btn-share", variant="success")
                yield Button("Accept", id="btn-accept", variant="primary")
                yield Button("Later", id="btn-later", variant="default")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if button_id.startswith("btn-"):
            self.dismiss(button_id[4:])

    def action_choose(self, choice: str) -> None:
        self.dismiss(choice)
