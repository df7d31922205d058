"""
Error classification for the break timer.

This module provides a structured exception hierarchy for the failure
modes of the timer: rejected user input, persistence failures and
notification channels that cannot deliver.
"""

from .input_errors import (
    InputValidationError,
    InvalidWorkDurationError,
    ConfigurationError,
)
from .system_failures import (
    SystemFailureError,
    PersistenceError,
)
from .recovery import (
    GracefulDegradationError,
    NotificationUnavailableError,
)

__all__ = [
    # Input Errors
    "InputValidationError",
    "InvalidWorkDurationError",
    "ConfigurationError",
    # System Failures
    "SystemFailureError",
    "PersistenceError",
    # Degradation
    "GracefulDegradationError",
    "NotificationUnavailableError",
]
