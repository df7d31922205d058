"""Audible cue played through a command-line audio player."""

import shutil
import subprocess
from pathlib import Path
from typing import Optional

from ..config.notification import SoundConfig
from ..errors import NotificationUnavailableError
from .base import BaseNotificationChannel, DeliveryResult, DeliveryStatus

BUNDLED_SOUND = Path(__file__).resolve().parent.parent / "resources" / "boop.wav"

# Tried in order when no player is configured
KNOWN_PLAYERS = ("paplay", "afplay", "aplay")


class SoundChannel(BaseNotificationChannel):
    """Plays the break sound without blocking the event loop."""

    def __init__(self, config: Optional[SoundConfig] = None, name: str = "sound"):
        super().__init__(name, config or SoundConfig())
        self.config: SoundConfig
        self.sound_path = Path(self.config.sound_path) if self.config.sound_path else BUNDLED_SOUND

    def find_player(self) -> Optional[str]:
        candidates = (self.config.player,) if self.config.player else KNOWN_PLAYERS
        for candidate in candidates:
            path = shutil.which(candidate)
            if path:
                return path
        return None

    def is_supported(self) -> bool:
        return self.find_player() is not None and self.sound_path.is_file()

    def deliver(self, message: str) -> DeliveryResult:
        player = self.find_player()
        if player is None:
            raise NotificationUnavailableError("No audio player found", channel=self.name)
        if not self.sound_path.is_file():
            raise NotificationUnavailableError(
                f"Sound file missing: {self.sound_path}", channel=self.name
            )

        try:
            subprocess.Popen(
                [player, str(self.sound_path)],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise NotificationUnavailableError(
                f"Failed to start {player}: {e}", channel=self.name
            ) from e

        self.logger.info("Sound played", player=player, file=str(self.sound_path))
        return self.record(DeliveryResult(
            channel=self.name,
            status=DeliveryStatus.SUCCESS,
            message=f"Played {self.sound_path.name}"
        ))
