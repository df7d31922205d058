"""
Break notification module.

OS alert, audible cue and in-app toast channels behind a single notifier.
"""
from .base import BaseNotificationChannel, DeliveryResult, DeliveryStatus, PermissionState
from .notifier import BreakNotifier, build_notifier

__all__ = [
    "BaseNotificationChannel",
    "BreakNotifier",
    "DeliveryResult",
    "DeliveryStatus",
    "PermissionState",
    "build_notifier",
]
