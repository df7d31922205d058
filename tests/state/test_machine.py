"""Tests for core timer state machine logic."""

import pytest

from breaktimer_app.state.machine import build_snapshot, derive_state, eval_tick, overdue_ms
from breaktimer_app.state.models import Session, TimerState
from breaktimer_app.utils.time import MS_PER_MINUTE, MS_PER_SECOND

T0 = 1_700_000_000_000
MINUTE = MS_PER_MINUTE
SECOND = MS_PER_SECOND


class TestDeriveState:
    """Test state derivation from timestamps."""

    def test_no_timestamp_is_stopped(self):
        assert derive_state(None, 25, T0) == TimerState.STOPPED

    @pytest.mark.parametrize("elapsed", [0, SECOND, 24 * MINUTE + 59 * SECOND])
    def test_below_threshold_is_running(self, elapsed):
        """Elapsed below the work duration stays RUNNING."""
        assert derive_state(T0, 25, T0 + elapsed) == TimerState.RUNNING

    @pytest.mark.parametrize("elapsed", [25 * MINUTE, 25 * MINUTE + 1, 3 * 60 * MINUTE])
    def test_at_or_above_threshold_is_overdue(self, elapsed):
        """Reaching the work duration exactly is already OVERDUE."""
        assert derive_state(T0, 25, T0 + elapsed) == TimerState.OVERDUE

    def test_clock_behind_start_is_running(self):
        """A start timestamp in the future counts as just started."""
        assert derive_state(T0, 25, T0 - 10 * SECOND) == TimerState.RUNNING


class TestOverdueMs:
    """Test overdue time computation."""

    def test_zero_when_stopped(self):
        assert overdue_ms(None, 25, T0) == 0

    def test_zero_while_running(self):
        assert overdue_ms(T0, 25, T0 + 10 * MINUTE) == 0

    def test_time_since_due(self):
        assert overdue_ms(T0, 25, T0 + 30 * MINUTE) == 5 * MINUTE


class TestEvalTick:
    """Test tick evaluation."""

    def test_stopped_session_yields_nothing(self):
        """A tick racing a stop sees no timestamp and does nothing."""
        assert eval_tick(Session(), 25, T0, TimerState.RUNNING) is None

    def test_running_without_change(self):
        session = Session.started(T0)
        assert eval_tick(session, 25, T0 + MINUTE, TimerState.RUNNING) is None

    def test_crossing_threshold_requests_notification(self):
        session = Session.started(T0)
        transition = eval_tick(session, 25, T0 + 25 * MINUTE, TimerState.RUNNING)

        assert transition is not None
        assert transition.from_state == TimerState.RUNNING
        assert transition.new_state == TimerState.OVERDUE
        assert transition.should_notify is True
        assert transition.timestamp == T0 + 25 * MINUTE

    def test_notified_session_does_not_notify_again(self):
        session = Session.started(T0).with_notified()
        assert eval_tick(session, 25, T0 + 30 * MINUTE, TimerState.OVERDUE) is None

    def test_resume_straight_into_overdue(self):
        """Resume evaluates from STOPPED directly to OVERDUE."""
        session = Session.started(T0)
        transition = eval_tick(
            session, 25, T0 + 40 * MINUTE, TimerState.STOPPED, trigger="resume"
        )

        assert transition.from_state == TimerState.STOPPED
        assert transition.new_state == TimerState.OVERDUE
        assert transition.should_notify is True
        assert transition.trigger == "resume"

    def test_longer_duration_returns_to_running_without_notify(self):
        """Raising the work duration while overdue goes back to RUNNING silently."""
        session = Session.started(T0).with_notified()
        transition = eval_tick(session, 60, T0 + 30 * MINUTE, TimerState.OVERDUE)

        assert transition.new_state == TimerState.RUNNING
        assert transition.should_notify is False


class TestBuildSnapshot:
    """Test snapshot construction."""

    def test_stopped_snapshot(self):
        snapshot = build_snapshot(Session(), 25, T0)
        assert snapshot.state == TimerState.STOPPED
        assert snapshot.elapsed_ms == 0
        assert snapshot.overdue_ms == 0
        assert snapshot.start_timestamp is None

    def test_overdue_snapshot(self):
        snapshot = build_snapshot(Session.started(T0).with_notified(), 25, T0 + 40 * MINUTE)
        assert snapshot.state == TimerState.OVERDUE
        assert snapshot.elapsed_ms == 40 * MINUTE
        assert snapshot.overdue_ms == 15 * MINUTE
        assert snapshot.notified is True

    def test_loading_flag_passes_through(self):
        assert build_snapshot(Session(), 25, T0, loading=True).loading is True

    def test_evaluated_state_is_reported(self):
        """A running session past the threshold stays RUNNING until evaluated."""
        snapshot = build_snapshot(
            Session.started(T0), 25, T0 + 30 * MINUTE, state=TimerState.RUNNING
        )
        assert snapshot.state == TimerState.RUNNING
        assert snapshot.overdue_ms == 0
        assert snapshot.elapsed_ms == 30 * MINUTE
