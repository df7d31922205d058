"""In-app toast rendered to a text stream."""

import json
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

from ..config.notification import ToastConfig
from ..errors import NotificationUnavailableError
from .base import BaseNotificationChannel, DeliveryResult, DeliveryStatus


class ToastChannel(BaseNotificationChannel):
    """Writes break messages to stdout (or any text stream)."""

    def __init__(self, config: Optional[ToastConfig] = None,
                 stream: Optional[TextIO] = None, name: str = "toast"):
        super().__init__(name, config or ToastConfig())
        self.config: ToastConfig
        self.stream = stream

    def _target(self) -> TextIO:
        return self.stream if self.stream is not None else sys.stdout

    def deliver(self, message: str) -> DeliveryResult:
        """Write the toast line."""
        try:
            print(self._format(message), file=self._target(), flush=True)
        except (OSError, ValueError) as e:
            raise NotificationUnavailableError(
                f"Toast stream unavailable: {e}", channel=self.name
            ) from e

        self.logger.info("Toast shown", delivery_name=self.name)
        return self.record(DeliveryResult(
            channel=self.name,
            status=DeliveryStatus.SUCCESS,
            message="Printed toast"
        ))

    def _format(self, message: str) -> str:
        now = datetime.now(timezone.utc).isoformat()
        if self.config.format == "pretty":
            if self.config.include_timestamp:
                return f"[{now}] INFO: {message}"
            return f"INFO: {message}"

        payload = {"level": "info", "message": message}
        if self.config.include_timestamp:
            payload["timestamp"] = now
        return json.dumps(payload)

    def is_supported(self) -> bool:
        """Check if the stream is writable."""
        try:
            return self._target().writable()
        except (OSError, ValueError, AttributeError):
            return False
