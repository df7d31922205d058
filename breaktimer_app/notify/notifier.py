"""Break notifier fanning one message out to independent channels."""

from typing import Optional

from ..config.notification import NotificationParams
from ..errors import NotificationUnavailableError
from ..logging.config import get_logger
from .base import BaseNotificationChannel, DeliveryResult, DeliveryStatus, PermissionState
from .os_alert import OsAlertChannel
from .sound import SoundChannel
from .toast import ToastChannel


class BreakNotifier:
    """
    Delivers the break-due message on every available channel.

    Channels are independent: a missing capability, a denied permission or a
    failing channel downgrades the signal to the remaining channels and is
    never raised to the caller.
    """

    def __init__(self, channels: list[BaseNotificationChannel],
                 permission: PermissionState = PermissionState.DEFAULT):
        self.channels = channels
        self.permission = permission
        self.logger = get_logger("breaktimer.notify")

    def supports_notifications(self) -> bool:
        """Whether an OS-level alert channel exists on this platform."""
        return any(
            channel.requires_permission and channel.enabled and channel.is_supported()
            for channel in self.channels
        )

    def request_permission(self) -> PermissionState:
        """
        Ask permission-gated channels for permission to alert.

        Idempotent; a denied permission is never asked again.
        """
        if not self.supports_notifications():
            return self.permission
        if self.permission != PermissionState.DEFAULT:
            return self.permission

        granted = False
        for channel in self.channels:
            if not (channel.requires_permission and channel.enabled):
                continue
            try:
                granted = channel.request_permission() or granted
            except Exception as e:
                self.logger.warning(
                    "Permission request failed",
                    channel=channel.name,
                    error=str(e)
                )

        self.permission = PermissionState.GRANTED if granted else PermissionState.DENIED
        self.logger.info("Notification permission resolved", permission=self.permission.value)
        return self.permission

    def notify(self, message: str) -> list[DeliveryResult]:
        """Deliver a message on all enabled channels."""
        results = []

        for channel in self.channels:
            if not channel.enabled:
                continue

            if channel.requires_permission and self.permission != PermissionState.GRANTED:
                results.append(DeliveryResult(
                    channel=channel.name,
                    status=DeliveryStatus.SKIPPED,
                    message=f"Permission {self.permission.value}"
                ))
                continue

            try:
                results.append(channel.deliver(message))
            except NotificationUnavailableError as e:
                self.logger.warning(
                    "Notification channel unavailable",
                    channel=channel.name,
                    error=str(e)
                )
                results.append(DeliveryResult(
                    channel=channel.name,
                    status=DeliveryStatus.SKIPPED,
                    message=str(e),
                    error=e
                ))
            except Exception as e:
                self.logger.error(
                    "Notification channel failed",
                    channel=channel.name,
                    error=str(e)
                )
                results.append(channel.record(DeliveryResult(
                    channel=channel.name,
                    status=DeliveryStatus.FAILED,
                    message=f"Channel error: {e}",
                    error=e
                )))

        return results


def build_notifier(params: Optional[NotificationParams] = None) -> BreakNotifier:
    """Create a notifier with the OS alert, sound and toast channels."""
    params = params or NotificationParams()
    return BreakNotifier(channels=[
        OsAlertChannel(params.os_alert),
        SoundChannel(params.sound),
        ToastChannel(params.toast),
    ])
