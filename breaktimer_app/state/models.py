"""
Timer state data models.

This module defines immutable data structures for the work session, the
derived view rendered by a UI, and state transitions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..utils.time import format_duration_ms


class TimerState(str, Enum):
    """Timer lifecycle states."""
    STOPPED = "stopped"
    RUNNING = "running"
    OVERDUE = "overdue"


STATUS_IDLE = "Let's start"
STATUS_WORKING = "Working..."
STATUS_OVERDUE = "Should have taken a break..."

TEXT_NOT_STARTED = "Not started"
TEXT_STARTING = "Starting..."

STOP_LABEL = "Stop"
BREAK_LABEL = "Take a break"


@dataclass(frozen=True)
class Session:
    """One continuous run from start to stop, identified by its start timestamp."""

    start_timestamp: Optional[int] = None            # Epoch ms; None when stopped
    notified: bool = False                           # Break-due signal fired for this start

    @property
    def is_running(self) -> bool:
        return self.start_timestamp is not None

    @classmethod
    def started(cls, timestamp: int) -> 'Session':
        """New or resumed session; the break-due signal is re-armed."""
        return cls(start_timestamp=timestamp, notified=False)

    def with_notified(self) -> 'Session':
        """Mark the break-due signal as fired."""
        return Session(start_timestamp=self.start_timestamp, notified=True)


@dataclass(frozen=True)
class StateTransition:
    """Result of evaluating a tick."""
    from_state: TimerState
    new_state: TimerState
    timestamp: int
    should_notify: bool = False
    trigger: str = "tick"


@dataclass(frozen=True)
class TimerSnapshot:
    """Everything a view needs to render the timer at one instant."""

    state: TimerState
    work_minutes: int
    now: int
    start_timestamp: Optional[int] = None
    elapsed_ms: int = 0
    overdue_ms: int = 0
    notified: bool = False
    loading: bool = False

    @property
    def is_running(self) -> bool:
        return self.state != TimerState.STOPPED

    @property
    def is_overdue(self) -> bool:
        return self.state == TimerState.OVERDUE

    @property
    def is_started(self) -> bool:
        """Running with some time elapsed."""
        return self.is_running and self.elapsed_ms > 0

    @property
    def is_starting(self) -> bool:
        return self.is_running and self.elapsed_ms <= 0

    @property
    def show_configuration(self) -> bool:
        """Work duration entry is only offered while stopped."""
        return not self.is_running

    @property
    def status_label(self) -> str:
        if not self.is_started:
            return STATUS_IDLE
        return STATUS_OVERDUE if self.is_overdue else STATUS_WORKING

    @property
    def display_text(self) -> str:
        if not self.is_running:
            return TEXT_NOT_STARTED
        if self.is_starting:
            return TEXT_STARTING
        if self.is_overdue:
            return f"{format_duration_ms(self.overdue_ms)} ago"
        return format_duration_ms(self.elapsed_ms)

    @property
    def stop_label(self) -> str:
        return BREAK_LABEL if self.is_overdue else STOP_LABEL

    @property
    def work_info(self) -> Optional[str]:
        if self.is_started and not self.is_overdue:
            return f"Timer set at {self.work_minutes} minutes"
        return None
