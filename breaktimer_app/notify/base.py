"""Base classes for break notification channels."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from ..logging.config import get_logger


class DeliveryStatus(Enum):
    """Notification delivery status."""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


class PermissionState(str, Enum):
    """Permission to show OS-level alerts."""
    DEFAULT = "default"
    GRANTED = "granted"
    DENIED = "denied"


@dataclass
class DeliveryResult:
    """Result of delivering a message on one channel."""
    channel: str
    status: DeliveryStatus
    message: Optional[str] = None
    error: Optional[Exception] = None


class BaseNotificationChannel(ABC):
    """Base class for a single break notification channel."""

    # Channels that show OS alerts only fire once permission is granted
    requires_permission = False

    def __init__(self, name: str, config: Any):
        self.name = name
        self.config = config
        self.logger = get_logger(f"breaktimer.notify.{name}")
        self._delivery_count = 0
        self._error_count = 0

    @property
    def enabled(self) -> bool:
        return bool(getattr(self.config, "enabled", True))

    @abstractmethod
    def is_supported(self) -> bool:
        """Capability check: can this channel deliver on this platform?"""
        pass

    @abstractmethod
    def deliver(self, message: str) -> DeliveryResult:
        """
        Deliver a message on this channel.

        Raises:
            NotificationUnavailableError: when the channel cannot deliver
        """
        pass

    def request_permission(self) -> bool:
        """Ask for permission to deliver. Channels without a permission model grant it."""
        return self.is_supported()

    def record(self, result: DeliveryResult) -> DeliveryResult:
        if result.status == DeliveryStatus.SUCCESS:
            self._delivery_count += 1
        elif result.status == DeliveryStatus.FAILED:
            self._error_count += 1
        return result

    def get_stats(self) -> dict[str, Any]:
        """Get delivery statistics."""
        return {
            "name": self.name,
            "delivery_count": self._delivery_count,
            "error_count": self._error_count,
            "success_rate": (
                self._delivery_count / (self._delivery_count + self._error_count)
                if (self._delivery_count + self._error_count) > 0 else 0.0
            )
        }

    def reset_stats(self):
        """Reset delivery statistics."""
        self._delivery_count = 0
        self._error_count = 0
