"""
Timer engine coordinator.

Owns the Stopped/Running/Overdue state machine, persists the session start
and work duration through the injected store, and fires the break-due
notification once per session.
"""

import asyncio
from typing import Any, Coroutine, Optional, Union

from .config.defaults import AppConfig, TimerParams
from .config.validation import parse_work_duration
from .errors import InvalidWorkDurationError
from .logging.config import get_state_logger, log_state_transition
from .notify.base import PermissionState
from .notify.notifier import BreakNotifier, build_notifier
from .persistence.config_store import PersistedConfigStore, StoreKey
from .state.machine import build_snapshot, eval_tick
from .state.models import Session, StateTransition, TimerSnapshot, TimerState
from .state.runtime import TickScheduler
from .utils.time import Clock, now_ms

logger = get_state_logger(__name__)


def _valid_timestamp(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class TimerEngine:
    """
    Work/break interval timer.

    Elapsed time is always ``now - start``; the persisted start timestamp is
    the session origin, which lets a restarted process resume mid-session.
    Persistence writes are fire-and-forget and never block a transition.
    """

    def __init__(
        self,
        store: PersistedConfigStore,
        notifier: BreakNotifier,
        params: Optional[TimerParams] = None,
        clock: Clock = now_ms,
        autotick: bool = True,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.params = params or TimerParams()
        self.clock = clock
        self.autotick = autotick
        self.logger = logger

        self.work_minutes = self.params.default_work_minutes
        self.session = Session()
        self.loading = True

        self._observed_state = TimerState.STOPPED
        self._evaluated_at: Optional[int] = None
        self._pending: set[asyncio.Task] = set()
        self._ticker = TickScheduler(self.params.tick_interval_seconds, self.tick)

    @classmethod
    def from_config(cls, config: AppConfig, **kwargs: Any) -> "TimerEngine":
        """Create an engine backed by the SQLite store and the default channels."""
        return cls(
            store=PersistedConfigStore.sqlite(
                db_path=config.storage.db_path,
                namespace=config.storage.namespace,
            ),
            notifier=build_notifier(config.notification),
            params=config.timer,
            **kwargs,
        )

    @property
    def state(self) -> TimerState:
        """State as of the last evaluation; only ``tick()`` moves RUNNING to OVERDUE."""
        return self._observed_state

    @property
    def is_running(self) -> bool:
        return self.session.is_running

    @property
    def ticking(self) -> bool:
        return self._ticker.active

    def snapshot(self) -> TimerSnapshot:
        """Render view as of the last evaluation."""
        now = self._evaluated_at
        if now is None or not self.session.is_running:
            now = self.clock()
        return build_snapshot(
            self.session, self.work_minutes, now,
            state=self._observed_state, loading=self.loading
        )

    async def load(self) -> TimerSnapshot:
        """
        Resynchronize from the store at process start.

        A persisted start timestamp resumes the session directly into
        RUNNING or OVERDUE. Resume re-arms the break-due signal and does not
        prompt for notification permission; a previously resolved permission
        is restored instead.
        """
        self.loading = True
        start, work, permission = await asyncio.gather(
            self.store.get(StoreKey.START),
            self.store.get(StoreKey.WORK),
            self.store.get(StoreKey.PERMISSION),
        )

        if work is not None:
            try:
                self.work_minutes = parse_work_duration(work)
            except InvalidWorkDurationError as e:
                self.logger.warning("Ignoring persisted work duration", value=e.raw_value)

        if permission is not None:
            self._restore_permission(permission)

        if _valid_timestamp(start) and not self.session.is_running:
            self.session = Session.started(start)
            self._evaluate(trigger="resume")
            self._begin_ticking()
        elif start is not None and not _valid_timestamp(start):
            self.logger.warning("Ignoring persisted start timestamp", value=start)

        self.loading = False
        return self.snapshot()

    def start(self) -> bool:
        """
        Start a new session.

        Returns:
            False when a session is already running
        """
        if self.session.is_running or self._ticker.active:
            return False

        now = self.clock()
        self.session = Session.started(now)
        self._evaluated_at = now
        self._request_permission()
        self._persist(self.store.set(StoreKey.START, now))

        log_state_transition(
            self.logger,
            session_id=now,
            from_state=TimerState.STOPPED.value,
            to_state=TimerState.RUNNING.value,
            trigger="start",
            context={"work_minutes": self.work_minutes}
        )
        self._observed_state = TimerState.RUNNING
        self._begin_ticking()
        return True

    def stop(self) -> bool:
        """
        Stop the running session.

        Returns:
            False when already stopped
        """
        if not self.session.is_running:
            return False

        self._ticker.cancel()

        previous = self._observed_state
        session_id = self.session.start_timestamp
        self.session = Session()
        self._observed_state = TimerState.STOPPED
        self._evaluated_at = None
        self._persist(self.store.remove(StoreKey.START))

        log_state_transition(
            self.logger,
            session_id=session_id,
            from_state=previous.value,
            to_state=TimerState.STOPPED.value,
            trigger="stop",
        )
        return True

    def set_work_duration(self, minutes: Union[int, str]) -> bool:
        """
        Update the work duration. Invalid input is ignored.

        Returns:
            True when the value was accepted and persisted
        """
        try:
            value = parse_work_duration(minutes)
        except InvalidWorkDurationError as e:
            self.logger.debug("Rejected work duration", value=e.raw_value, reason=str(e))
            return False

        self.work_minutes = value
        self._persist(self.store.set(StoreKey.WORK, value))
        self.logger.info("Work duration updated", work_minutes=value)
        return True

    def tick(self) -> Optional[StateTransition]:
        """
        Recompute state from the clock; fires the break-due signal once.

        Idempotent for a given ``now``; a tick while stopped does nothing.
        """
        return self._evaluate(trigger="tick")

    def _evaluate(self, trigger: str) -> Optional[StateTransition]:
        now = self.clock()
        self._evaluated_at = now
        transition = eval_tick(
            self.session, self.work_minutes, now, self._observed_state, trigger=trigger
        )
        if transition is None:
            return None

        if transition.new_state != transition.from_state:
            log_state_transition(
                self.logger,
                session_id=self.session.start_timestamp,
                from_state=transition.from_state.value,
                to_state=transition.new_state.value,
                trigger=transition.trigger,
                context={"work_minutes": self.work_minutes}
            )
            self._observed_state = transition.new_state

        if transition.should_notify:
            self.session = self.session.with_notified()
            self._signal_break()

        return transition

    async def flush(self) -> None:
        """Wait for outstanding persistence writes."""
        while self._pending:
            pending = list(self._pending)
            await asyncio.gather(*pending, return_exceptions=True)
            self._pending.difference_update(pending)

    async def close(self) -> None:
        """Cancel ticking and drain writes. Persisted state is kept for resume."""
        self._ticker.cancel()
        await self.flush()

    async def __aenter__(self) -> "TimerEngine":
        await self.load()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _begin_ticking(self) -> None:
        if self.autotick:
            self._ticker.start()

    def _request_permission(self) -> None:
        previous = self.notifier.permission
        try:
            permission = self.notifier.request_permission()
        except Exception as e:
            self.logger.warning("Notification permission request failed", error=str(e))
            return

        if permission != previous and permission != PermissionState.DEFAULT:
            self._persist(self.store.set(StoreKey.PERMISSION, permission.value))

    def _restore_permission(self, value: Any) -> None:
        try:
            self.notifier.permission = PermissionState(value)
        except ValueError:
            self.logger.warning("Ignoring persisted notification permission", value=value)

    def _signal_break(self) -> None:
        try:
            results = self.notifier.notify(self.params.break_message)
        except Exception as e:
            self.logger.error("Break notification failed", error=str(e))
            return

        self.logger.info(
            "Break due",
            session_id=self.session.start_timestamp,
            channels={r.channel: r.status.value for r in results}
        )

    def _persist(self, operation: Coroutine[Any, Any, bool]) -> None:
        try:
            task = asyncio.get_running_loop().create_task(operation)
        except RuntimeError:
            operation.close()
            self.logger.error("No running event loop; change not persisted")
            return

        self._pending.add(task)
        task.add_done_callback(self._on_persisted)

    def _on_persisted(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.error("Persistence task failed", error=str(error))
        elif task.result() is False:
            self.logger.warning("Change kept in memory only")
