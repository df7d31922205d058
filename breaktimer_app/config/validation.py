"""Configuration validation utilities."""

import math
from dataclasses import dataclass
from typing import Any, Union

from ..errors import InvalidWorkDurationError

TOAST_FORMATS = ("pretty", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def parse_work_duration(raw: Union[int, float, str, None]) -> int:
    """
    Parse a work duration in whole minutes.

    Accepts ints, integral floats and strings holding either. Empty,
    non-numeric, fractional, non-finite and non-positive values are rejected.

    Raises:
        InvalidWorkDurationError: when the value cannot be used
    """
    if raw is None or isinstance(raw, bool):
        raise InvalidWorkDurationError("Work duration is required", raw_value=raw)

    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            raise InvalidWorkDurationError("Work duration is empty", raw_value=raw)
        try:
            value = float(text)
        except ValueError:
            raise InvalidWorkDurationError(
                "Work duration is not a number", raw_value=raw
            ) from None
    elif isinstance(raw, (int, float)):
        value = float(raw)
    else:
        raise InvalidWorkDurationError(
            f"Unsupported work duration type: {type(raw).__name__}", raw_value=raw
        )

    if not math.isfinite(value) or not value.is_integer():
        raise InvalidWorkDurationError(
            "Work duration must be a whole number of minutes", raw_value=raw
        )
    if value <= 0:
        raise InvalidWorkDurationError("Work duration must be positive", raw_value=raw)

    return int(value)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_timer_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate timer parameters."""
        errors = []

        if "default_work_minutes" in params:
            value = params["default_work_minutes"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="default_work_minutes",
                    message="Must be a positive integer",
                    value=value
                ))

        if "tick_interval_seconds" in params:
            value = params["tick_interval_seconds"]
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="tick_interval_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        if "break_message" in params:
            value = params["break_message"]
            if not isinstance(value, str) or not value.strip():
                errors.append(ValidationError(
                    field="break_message",
                    message="Must be a non-empty string",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_storage_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate storage parameters."""
        errors = []

        for name in ("db_path", "namespace"):
            if name in params:
                value = params[name]
                if not isinstance(value, str) or not value:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a non-empty string",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_notification_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate notification channel parameters."""
        errors = []

        for channel in ("os_alert", "sound", "toast"):
            section = params.get(channel)
            if section is None:
                continue
            if not isinstance(section, dict):
                errors.append(ValidationError(
                    field=channel,
                    message="Must be a mapping",
                    value=section
                ))
                continue

            if "enabled" in section and not isinstance(section["enabled"], bool):
                errors.append(ValidationError(
                    field=f"{channel}.enabled",
                    message="Must be a boolean",
                    value=section["enabled"]
                ))

            if "timeout_seconds" in section:
                value = section["timeout_seconds"]
                if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=f"{channel}.timeout_seconds",
                        message="Must be a positive integer",
                        value=value
                    ))

        sound = params.get("sound")
        if isinstance(sound, dict) and sound.get("sound_path") is not None:
            if not isinstance(sound["sound_path"], str) or not sound["sound_path"]:
                errors.append(ValidationError(
                    field="sound.sound_path",
                    message="Must be a non-empty string or null",
                    value=sound["sound_path"]
                ))

        toast = params.get("toast")
        if isinstance(toast, dict) and "format" in toast:
            if toast["format"] not in TOAST_FORMATS:
                errors.append(ValidationError(
                    field="toast.format",
                    message=f"Must be one of {', '.join(TOAST_FORMATS)}",
                    value=toast["format"]
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            errors.append(ValidationError(
                field="format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "timer" in config:
            errors.extend(ConfigValidator.validate_timer_params(config["timer"]))

        if "storage" in config:
            errors.extend(ConfigValidator.validate_storage_params(config["storage"]))

        if "notification" in config:
            errors.extend(ConfigValidator.validate_notification_params(config["notification"]))

        if "logging" in config:
            errors.extend(ConfigValidator.validate_logging_params(config["logging"]))

        return errors
