"""Smoke tests for the Textual chat app."""
import pytest

from ora.conversation import Feedback
from ora.ui import ChatHistoryWidget, DebugPanel, OraChatApp
from ora.ui.widgets import CollaborationStatus, VideoPanel


class TestOraChatApp:
    """Tests for OraChatApp driven through the Textual pilot."""

    @pytest.mark.asyncio
    async def test_opens_panel_with_welcome(self, panel):
        """Test that mounting opens the panel and shows the welcome message."""
        app = OraChatApp(panel)
        async with app.run_test() as pilot:
            await pilot.pause()
            assert panel.is_open
            chat = app.query_one("#chat-history", ChatHistoryWidget)
            assert chat.message_count == 1
            assert not app.query_one("#debug-panel", DebugPanel).display
            assert not app.query_one("#collaboration-status", CollaborationStatus).display
            assert app.query_one("#video-panel", VideoPanel).border_subtitle == panel.rotation.current
        await panel.close()

    @pytest.mark.asyncio
    async def test_typed_message_gets_reply(self, panel):
        """Test typing a message and receiving the reply."""
        app = OraChatApp(panel)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press(*"hello", "enter")
            await pilot.pause()
            await panel.wait_idle()
            await pilot.pause()

            chat = app.query_one("#chat-history", ChatHistoryWidget)
            assert chat.message_count == 3
            assert panel.messages[0].content == "hello"
            assert chat.last_assistant_message() is panel.messages[-1]
        await panel.close()

    @pytest.mark.asyncio
    async def test_feedback_binding(self, panel):
        """Test rating the latest reply with Ctrl+T."""
        app = OraChatApp(panel)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press(*"hello", "enter")
            await pilot.pause()
            await panel.wait_idle()
            await pilot.pause()

            await pilot.press("ctrl+t")
            await pilot.pause()
            assert panel.messages[-1].feedback is Feedback.THUMBS_UP
        await panel.close()

    @pytest.mark.asyncio
    async def test_toggle_debug_panel(self, panel):
        """Test Ctrl+D shows and hides the log panel."""
        app = OraChatApp(panel)
        async with app.run_test() as pilot:
            await pilot.pause()
            debug = app.query_one("#debug-panel", DebugPanel)
            await pilot.press("ctrl+d")
            await pilot.pause()
            assert debug.display
            await pilot.press("ctrl+d")
            await pilot.pause()
            assert not debug.display
        await panel.close()

    @pytest.mark.asyncio
    async def test_log_level_shows_debug_panel(self, panel):
        """Test that a log level starts with the log panel visible."""
        app = OraChatApp(panel, log_level="info")
        async with app.run_test() as pilot:
            await pilot.pause()
            assert app.query_one("#debug-panel", DebugPanel).display
        await panel.close()

    @pytest.mark.asyncio
    async def test_clear_chat(self, panel):
        """Test Ctrl+K clears the history."""
        app = OraChatApp(panel)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("ctrl+k")
            await pilot.pause()
            assert app.query_one("#chat-history", ChatHistoryWidget).message_count == 0
        await panel.close()
