"""Tests for the periodic tick scheduler."""

import asyncio

import pytest

from breaktimer_app.state.runtime import TickScheduler


class TestTickScheduler:
    """Test the repeating tick task."""

    @pytest.mark.asyncio
    async def test_ticks_repeatedly(self):
        calls = []
        scheduler = TickScheduler(0.01, lambda: calls.append(1))

        scheduler.start()
        await asyncio.sleep(0.1)
        scheduler.cancel()

        assert len(calls) >= 2

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self):
        scheduler = TickScheduler(0.01, lambda: None)

        scheduler.start()
        first = scheduler._task
        scheduler.start()

        assert scheduler._task is first
        scheduler.cancel()

    @pytest.mark.asyncio
    async def test_cancel_stops_ticking(self):
        calls = []
        scheduler = TickScheduler(0.01, lambda: calls.append(1))

        scheduler.start()
        await asyncio.sleep(0.05)
        scheduler.cancel()
        count = len(calls)
        await asyncio.sleep(0.05)

        assert scheduler.active is False
        assert len(calls) == count

    @pytest.mark.asyncio
    async def test_cancel_when_inactive_is_safe(self):
        scheduler = TickScheduler(0.01, lambda: None)
        scheduler.cancel()
        assert scheduler.active is False

    @pytest.mark.asyncio
    async def test_failing_callback_keeps_ticking(self):
        """A callback error is logged and the schedule continues."""
        calls = []

        def callback():
            calls.append(1)
            raise RuntimeError("boom")

        scheduler = TickScheduler(0.01, callback)
        scheduler.start()
        await asyncio.sleep(0.1)

        assert scheduler.active is True
        assert len(calls) >= 2
        scheduler.cancel()

    def test_start_without_running_loop(self):
        """Outside an event loop nothing is scheduled."""
        scheduler = TickScheduler(0.01, lambda: None)

        assert scheduler.start() is False
        assert scheduler.active is False
