"""Tests for the ora command line."""
import asyncio

import pytest
from typer.testing import CliRunner

from ora.cli.app import app
from ora.conversation import ConversationLog
from ora.store import create_key_value_store

runner = CliRunner()


async def _first_entry_id(path) -> str:
    store = create_key_value_store("sqlite", path=path)
    await store.connect()
    try:
        return (await ConversationLog(store).entries())[0].id
    finally:
        await store.disconnect()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, sqlite_path):
    """Point every command at a throwaway database with no reply delays."""
    monkeypatch.setenv("ORA_STORE_BACKEND", "sqlite")
    monkeypatch.setenv("ORA_STORE_PATH", str(sqlite_path))
    monkeypatch.setenv("ORA_FAST", "1")
    monkeypatch.setenv("ORA_LOG_LEVEL", "error")


class TestInspection:
    """Tests for commands that only read."""

    def test_rules(self):
        """Test the rule listing."""
        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0
        assert "multi_agent" in result.output
        assert "fallback" in result.output

    def test_resolve(self):
        """Test resolving without sending."""
        result = runner.invoke(app, ["resolve", "connect news to CNN"])
        assert result.exit_code == 0
        assert "news" in result.output
        assert "CNN" in result.output

    def test_config_shows_defaults(self):
        """Test the configuration table after first open."""
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "War on the Rocks" in result.output
        assert "free" in result.output

    def test_empty_logs(self):
        """Test the empty conversation log."""
        result = runner.invoke(app, ["logs"])
        assert result.exit_code == 0
        assert "No conversations logged yet." in result.output


class TestMessages:
    """Tests for commands that talk to the panel."""

    def test_ask(self):
        """Test a fallback reply."""
        result = runner.invoke(app, ["ask", "hello"])
        assert result.exit_code == 0
        assert "Matched rule: fallback" in result.output
        assert "Thank you for asking" in result.output

        logs = runner.invoke(app, ["logs"])
        assert logs.exit_code == 0
        assert "No conversations logged yet." not in logs.output

    def test_ask_blank(self):
        """Test that a blank message fails."""
        result = runner.invoke(app, ["ask", "  "])
        assert result.exit_code == 1
        assert "empty" in result.output

    def test_pill(self):
        """Test pressing a pill button."""
        result = runner.invoke(app, ["pill", "Leadership", "--fast"])
        assert result.exit_code == 0
        assert "Now playing" in result.output

    def test_feedback(self, sqlite_path):
        """Test rating a logged reply."""
        runner.invoke(app, ["ask", "hello"])
        entry_id = asyncio.run(_first_entry_id(sqlite_path))

        result = runner.invoke(app, ["feedback", entry_id, "up"])
        assert result.exit_code == 0
        assert f"Feedback recorded for {entry_id}" in result.output

    def test_feedback_unknown_entry(self):
        """Test rating an entry that does not exist."""
        result = runner.invoke(app, ["feedback", "conv_missing", "up"])
        assert result.exit_code == 1
        assert "No conversation log entry" in result.output


class TestAccount:
    """Tests for tier, uploads and check-ins."""

    def test_tier_persists(self):
        """Test that the tier is visible to later commands."""
        result = runner.invoke(app, ["tier", "premium"])
        assert result.exit_code == 0
        assert "Tier set to premium" in result.output
        assert "premium" in runner.invoke(app, ["config"]).output

    def test_upload_requires_paid_tier(self, tmp_path):
        """Test that a free user cannot fill a persona slot."""
        video = tmp_path / "clip.mp4"
        video.write_bytes(b"\x00" * 64)
        result = runner.invoke(app, ["upload-video", "persona", "1", str(video)])
        assert result.exit_code == 1
        assert "paid tier" in result.output

    def test_upload_persona_video(self, tmp_path):
        """Test a premium persona upload."""
        video = tmp_path / "clip.mp4"
        video.write_bytes(b"\x00" * 64)
        runner.invoke(app, ["tier", "premium"])

        result = runner.invoke(app, ["upload-video", "persona", "1", str(video)])
        assert result.exit_code == 0
        assert "Persona slot 1" in result.output

    def test_upload_slot_out_of_range(self, tmp_path):
        """Test a slot number past the last slot."""
        video = tmp_path / "clip.mp4"
        video.write_bytes(b"\x00" * 64)
        runner.invoke(app, ["tier", "premium"])

        result = runner.invoke(app, ["upload-video", "persona", "99", str(video)])
        assert result.exit_code == 1

    def test_checkin(self):
        """Test a check-in with a known feeling."""
        result = runner.invoke(app, ["checkin", "happy", "--note", "good week"])
        assert result.exit_code == 0
        assert "Checked in as Happy" in result.output

    def test_checkin_unknown_feeling(self):
        """Test that unknown feelings are rejected."""
        result = runner.invoke(app, ["checkin", "bored"])
        assert result.exit_code == 1
        assert "Unknown feeling" in result.output
