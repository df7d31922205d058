"""Default configuration parameters for the break timer."""

from dataclasses import dataclass

from .notification import NotificationParams


@dataclass(frozen=True)
class TimerParams:
    """Timer engine parameters."""
    default_work_minutes: int = 25                  # Used until the user configures one
    tick_interval_seconds: float = 1.0              # Recompute cadence
    break_message: str = "Time for a break!"


@dataclass(frozen=True)
class StorageParams:
    """Persistent key-value store parameters."""
    db_path: str = "breaktimer.db"
    namespace: str = "breaktimer"                   # Groups keys so reset_all() is scoped


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters passed to configure_logging()."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration."""
    timer: TimerParams
    storage: StorageParams
    notification: NotificationParams
    logging: LoggingParams


def get_default_config() -> AppConfig:
    """Get the default configuration instance."""
    return AppConfig(
        timer=TimerParams(),
        storage=StorageParams(),
        notification=NotificationParams(),
        logging=LoggingParams(),
    )
