"""Configuration for break notification channels."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class OsAlertConfig:
    """Configuration for desktop notifications."""
    enabled: bool = True
    app_name: str = "Break Timer"
    command: Optional[str] = None                   # Autodetected when None
    timeout_seconds: int = 5


@dataclass(frozen=True)
class SoundConfig:
    """Configuration for the audible cue."""
    enabled: bool = True
    sound_path: Optional[str] = None               # Bundled chime when None
    player: Optional[str] = None                    # Autodetected when None
    timeout_seconds: int = 5


@dataclass(frozen=True)
class ToastConfig:
    """Configuration for the in-app toast."""
    enabled: bool = True
    format: str = "pretty"  # pretty, json
    include_timestamp: bool = True


@dataclass(frozen=True)
class NotificationParams:
    """Complete notification configuration."""
    os_alert: OsAlertConfig = field(default_factory=OsAlertConfig)
    sound: SoundConfig = field(default_factory=SoundConfig)
    toast: ToastConfig = field(default_factory=ToastConfig)
