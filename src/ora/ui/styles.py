"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Chat on the left; video, collaboration status and log on the right;
pill buttons and the input bar along the bottom.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    layout: grid;
    grid-size: 2 2;
    grid-columns: 3fr 2fr;
    grid-rows: 1fr auto;
    background: $background;
}

/* ============================================
   Chat History Panel
   ============================================ */
#chat-history {
    height: 100%;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus-within {
        border: round $primary;
    }
}

.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border-left: thick $primary;
    background: $primary 8%;
}

.assistant-message {
    border-left: thick $secondary;
    background: $secondary 8%;
}

.multi-agent {
    border-left: thick $accent;
}

.message-header {
    color: $text-muted;
    text-style: bold;
}

.message-content {
    height: auto;
}

/* ============================================
   Right Panel
   ============================================ */
#right-panel {
    height: 100%;
}

#video-panel {
    height: 5;
    background: $surface;
    border: round $secondary 60%;
    border-title-color: $secondary;
    padding: 0 1;
}

#collaboration-status {
    height: auto;
    background: $surface;
    border: round $accent;
    border-title-color: $accent;
    padding: 0 1;
}

#debug-panel {
    height: 1fr;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
}

/* ============================================
   Bottom Bar - Pills + Input
   ============================================ */
#bottom-bar {
    column-span: 2;
    height: auto;
    padding: 0 1;
    background: $panel;
    border-top: solid $border;
}

PillBar {
    height: 3;
}

PillBar Button {
    margin: 0 1 0 0;
    min-width: 10;
}

ChatInputBar {
    height: 3;
}

#chat-input {
    width: 1fr;
}

#send-btn {
    width: 10;
    margin: 0 0 0 1;
}

/* ============================================
   Agreement dialog
   ============================================ */
AgreementScreen {
    align: center middle;
    background: $background 70%;
}

#agreement-dialog {
    width: 64;
    height: auto;
    border: tall $accent;
    background: $surface;
    padding: 1 2;
}

#agreement-title {
    width: 100%;
    text-align: center;
    text-style: bold;
    color: $accent;
    margin-bottom: 1;
}

#agreement-buttons {
    width: 100%;
    height: 3;
    align: center middle;
}

#agreement-buttons Button {
    margin: 0 1;
}
"""
