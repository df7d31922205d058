"""
Core timer state machine logic.

States are derived from the session start timestamp and the current
wall-clock time on every evaluation; nothing is accumulated between ticks,
so evaluation is correct after restarts, suspension or sleep.
"""

from typing import Optional

from ..utils.time import elapsed_ms, minutes_to_ms
from .models import Session, StateTransition, TimerSnapshot, TimerState


def derive_state(start_timestamp: Optional[int], work_minutes: int, now: int) -> TimerState:
    """
    Derive the timer state at ``now``.

    Args:
        start_timestamp: Session start in epoch ms, None when stopped
        work_minutes: Configured work duration
        now: Current time in epoch ms

    Returns:
        STOPPED without a start timestamp, OVERDUE once elapsed reaches the
        work duration, RUNNING otherwise
    """
    if start_timestamp is None:
        return TimerState.STOPPED

    if elapsed_ms(start_timestamp, now) >= minutes_to_ms(work_minutes):
        return TimerState.OVERDUE

    return TimerState.RUNNING


def overdue_ms(start_timestamp: Optional[int], work_minutes: int, now: int) -> int:
    """Time since the break became due; zero while not overdue."""
    if start_timestamp is None:
        return 0
    return max(elapsed_ms(start_timestamp, now) - minutes_to_ms(work_minutes), 0)


def eval_tick(
    session: Session,
    work_minutes: int,
    now: int,
    previous_state: TimerState,
    trigger: str = "tick"
) -> Optional[StateTransition]:
    """
    Evaluate one tick.

    Args:
        session: Current session
        work_minutes: Configured work duration
        now: Current time in epoch ms
        previous_state: State observed on the previous evaluation
        trigger: What caused the evaluation (tick or resume)

    Returns:
        StateTransition when the derived state changed or the break-due
        signal has to fire, None otherwise
    """
    # Ticks racing a stop see no timestamp
    if not session.is_running:
        return None

    state = derive_state(session.start_timestamp, work_minutes, now)
    should_notify = state == TimerState.OVERDUE and not session.notified

    if state == previous_state and not should_notify:
        return None

    return StateTransition(
        from_state=previous_state,
        new_state=state,
        timestamp=now,
        should_notify=should_notify,
        trigger=trigger,
    )


def build_snapshot(session: Session, work_minutes: int, now: int,
                   state: Optional[TimerState] = None,
                   loading: bool = False) -> TimerSnapshot:
    """
    Build the render view of a session at ``now``.

    ``state`` is the state from the last evaluation; when omitted it is
    derived from ``now``.
    """
    start = session.start_timestamp
    if state is None:
        state = derive_state(start, work_minutes, now)
    return TimerSnapshot(
        state=state,
        work_minutes=work_minutes,
        now=now,
        start_timestamp=start,
        elapsed_ms=elapsed_ms(start, now) if start is not None else 0,
        overdue_ms=overdue_ms(start, work_minutes, now) if state == TimerState.OVERDUE else 0,
        notified=session.notified and session.is_running,
        loading=loading,
    )
