"""Desktop notifications via the platform's notification command."""

import shutil
import subprocess
import sys
from typing import Optional

from ..config.notification import OsAlertConfig
from ..errors import NotificationUnavailableError
from .base import BaseNotificationChannel, DeliveryResult, DeliveryStatus


def default_command(platform: str = sys.platform) -> Optional[str]:
    """Notification command for a platform, or None when there is none."""
    if platform.startswith("linux"):
        return "notify-send"
    if platform == "darwin":
        return "osascript"
    return None


class OsAlertChannel(BaseNotificationChannel):
    """Shows an OS-level alert. Fires only after permission was granted."""

    requires_permission = True

    def __init__(self, config: Optional[OsAlertConfig] = None, name: str = "os_alert",
                 platform: str = sys.platform):
        super().__init__(name, config or OsAlertConfig())
        self.config: OsAlertConfig
        self.command = self.config.command or default_command(platform)

    def is_supported(self) -> bool:
        return self.command is not None and shutil.which(self.command) is not None

    def build_args(self, message: str) -> list[str]:
        if self.command is not None and self.command.endswith("osascript"):
            # Text travels as arguments, never as script source
            return [
                self.command,
                "-e", "on run argv",
                "-e", "display notification (item 1 of argv) with title (item 2 of argv)",
                "-e", "end run",
                message,
                self.config.app_name,
            ]
        return [
            self.command or "",
            "--app-name", self.config.app_name,
            "--expire-time", str(self.config.timeout_seconds * 1000),
            self.config.app_name,
            message,
        ]

    def deliver(self, message: str) -> DeliveryResult:
        if not self.is_supported():
            raise NotificationUnavailableError(
                "No desktop notification command available", channel=self.name
            )

        try:
            subprocess.Popen(
                self.build_args(message),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise NotificationUnavailableError(
                f"Failed to run {self.command}: {e}", channel=self.name
            ) from e

        self.logger.info("Desktop alert shown", command=self.command)
        return self.record(DeliveryResult(
            channel=self.name,
            status=DeliveryStatus.SUCCESS,
            message="Desktop alert shown"
        ))
