"""
Input error classifications for values supplied by the user or config files.

These errors are always recoverable: the offending value is rejected and
the previous value stays in effect.
"""

from typing import Optional, Dict, Any


class InputValidationError(Exception):
    """Base class for rejected input."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class InvalidWorkDurationError(InputValidationError):
    """Work duration is empty, non-numeric, fractional or not positive."""

    def __init__(self, message: str, raw_value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_value = raw_value


class ConfigurationError(InputValidationError):
    """Configuration file or overrides failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None,
                 source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
        self.source = source
