"""
Degradation error classifications.

These errors allow continued operation with reduced functionality.
"""

from typing import Optional


class GracefulDegradationError(Exception):
    """Errors that allow continued operation with reduced functionality."""

    def __init__(self, message: str, degraded_functionality: Optional[str] = None,
                 fallback_strategy: Optional[str] = None, **kwargs):
        super().__init__(message)
        self.degraded_functionality = degraded_functionality
        self.fallback_strategy = fallback_strategy
        self.allows_degradation = True
        self.recoverable = True


class NotificationUnavailableError(GracefulDegradationError):
    """A notification channel is missing or lacks permission."""

    def __init__(self, message: str, channel: Optional[str] = None, **kwargs):
        kwargs.setdefault("degraded_functionality", channel)
        kwargs.setdefault("fallback_strategy", "remaining_channels")
        super().__init__(message, **kwargs)
        self.channel = channel
