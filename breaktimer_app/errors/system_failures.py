"""
System failure error classifications.

These exceptions represent failures of the machinery around the timer.
None of them is fatal: callers log them and keep the in-memory state.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for system-level failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class PersistenceError(SystemFailureError):
    """Key-value store read, write or remove failure."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target
