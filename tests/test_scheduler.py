"""Tests for ordered, cancellable reply delivery."""
import asyncio

import pytest

from ora.agent import ReplyScheduler


def _recorder(delivered: list, value):
    async def deliver():
        delivered.append(value)
    return deliver


class TestReplyScheduler:
    """Tests for ReplyScheduler."""

    @pytest.mark.asyncio
    async def test_delivers_in_schedule_order(self):
        """Test that a shorter delay never overtakes an earlier reply."""
        scheduler = ReplyScheduler()
        delivered = []
        scheduler.schedule(0.05, _recorder(delivered, "slow"))
        scheduler.schedule(0, _recorder(delivered, "fast"))

        await scheduler.wait_idle()
        assert delivered == ["slow", "fast"]
        assert scheduler.pending == 0

    @pytest.mark.asyncio
    async def test_cancel_all(self):
        """Test that cancelled replies are never delivered."""
        scheduler = ReplyScheduler()
        delivered = []
        scheduler.schedule(10, _recorder(delivered, "a"))
        scheduler.schedule(10, _recorder(delivered, "b"))
        generation = scheduler.generation

        assert scheduler.cancel_all() == 2
        await scheduler.wait_idle()
        assert delivered == []
        assert scheduler.generation == generation + 1

    @pytest.mark.asyncio
    async def test_schedules_after_cancel_still_deliver(self):
        """Test that the scheduler keeps working after a cancel."""
        scheduler = ReplyScheduler()
        delivered = []
        scheduler.schedule(10, _recorder(delivered, "old"))
        scheduler.cancel_all()
        scheduler.schedule(0, _recorder(delivered, "new"))

        await scheduler.wait_idle()
        assert delivered == ["new"]

    @pytest.mark.asyncio
    async def test_failed_delivery_does_not_block_the_next(self):
        """Test that one failing reply does not stop later ones."""
        scheduler = ReplyScheduler()
        delivered = []

        async def broken():
            raise RuntimeError("boom")

        scheduler.schedule(0, broken)
        scheduler.schedule(0, _recorder(delivered, "after"))

        await scheduler.wait_idle()
        assert delivered == ["after"]

    @pytest.mark.asyncio
    async def test_wait_idle_includes_replies_scheduled_meanwhile(self):
        """Test that replies scheduled by a delivery are awaited too."""
        scheduler = ReplyScheduler()
        delivered = []

        async def chain():
            delivered.append("first")
            scheduler.schedule(0, _recorder(delivered, "second"))

        scheduler.schedule(0, chain)
        await scheduler.wait_idle()
        assert delivered == ["first", "second"]

    @pytest.mark.asyncio
    async def test_returns_task(self):
        """Test that schedule returns the delivery task."""
        scheduler = ReplyScheduler()
        task = scheduler.schedule(0, _recorder([], "x"), name="reply")
        assert isinstance(task, asyncio.Task)
        assert task.get_name() == "reply"
        await task
