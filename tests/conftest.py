"""Pytest configuration and shared fixtures."""

from typing import Callable, Optional

import pytest

from breaktimer_app.config.defaults import TimerParams
from breaktimer_app.engine import TimerEngine
from breaktimer_app.errors import PersistenceError
from breaktimer_app.notify.base import BaseNotificationChannel, DeliveryResult, DeliveryStatus
from breaktimer_app.notify.notifier import BreakNotifier
from breaktimer_app.persistence.config_store import KeyValueBackend, PersistedConfigStore
from breaktimer_app.utils.time import MS_PER_MINUTE, MS_PER_SECOND

# 2023-11-14T22:13:20Z
T0 = 1_700_000_000_000
MINUTE = MS_PER_MINUTE
SECOND = MS_PER_SECOND


class FakeClock:
    """Manually driven epoch-millisecond clock."""

    def __init__(self, start_ms: int = T0):
        self.current = start_ms

    def __call__(self) -> int:
        return self.current

    def set(self, value_ms: int) -> None:
        self.current = value_ms

    def advance(self, ms: int) -> None:
        self.current += ms


class RecordingChannel(BaseNotificationChannel):
    """Notification channel that records delivered messages."""

    def __init__(self, name: str = "recording", requires_permission: bool = False,
                 supported: bool = True, grant: bool = True,
                 error: Optional[Exception] = None):
        super().__init__(name, config=None)
        self.requires_permission = requires_permission
        self.supported = supported
        self.grant = grant
        self.error = error
        self.messages: list[str] = []
        self.permission_requests = 0

    def is_supported(self) -> bool:
        return self.supported

    def request_permission(self) -> bool:
        self.permission_requests += 1
        return self.grant

    def deliver(self, message: str) -> DeliveryResult:
        if self.error is not None:
            raise self.error
        self.messages.append(message)
        return self.record(DeliveryResult(channel=self.name, status=DeliveryStatus.SUCCESS))


class FailingBackend(KeyValueBackend):
    """Backend whose every operation fails."""

    async def get_item(self, key):
        raise PersistenceError("disk unavailable", operation="get", target=key)

    async def set_item(self, key, value):
        raise PersistenceError("disk unavailable", operation="set", target=key)

    async def remove_item(self, key):
        raise PersistenceError("disk unavailable", operation="remove", target=key)

    async def length(self):
        raise PersistenceError("disk unavailable", operation="length")

    async def clear(self):
        raise PersistenceError("disk unavailable", operation="clear")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def os_channel() -> RecordingChannel:
    return RecordingChannel(name="os_alert", requires_permission=True)


@pytest.fixture
def toast_channel() -> RecordingChannel:
    return RecordingChannel(name="toast")


@pytest.fixture
def notifier(os_channel, toast_channel) -> BreakNotifier:
    return BreakNotifier(channels=[os_channel, toast_channel])


@pytest.fixture
def store() -> PersistedConfigStore:
    return PersistedConfigStore.in_memory()


@pytest.fixture
def failing_store() -> PersistedConfigStore:
    return PersistedConfigStore(FailingBackend())


@pytest.fixture
def make_engine(store, notifier, clock) -> Callable[..., TimerEngine]:
    """Factory for engines driven by the fake clock with manual ticks."""

    def _make(**kwargs) -> TimerEngine:
        kwargs.setdefault("store", store)
        kwargs.setdefault("notifier", notifier)
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("params", TimerParams(default_work_minutes=25))
        kwargs.setdefault("autotick", False)
        return TimerEngine(**kwargs)

    return _make


@pytest.fixture
def make_channel() -> Callable[..., RecordingChannel]:
    """Factory for recording notification channels."""
    return RecordingChannel
