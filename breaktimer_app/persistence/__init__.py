"""
Persistence module.

Durable key-value storage for the session start timestamp, the configured
work duration and the task description.
"""
from .config_store import (
    KeyValueBackend,
    MemoryBackend,
    PersistedConfigStore,
    SQLiteBackend,
    StoreKey,
    STORAGE_KEYS,
)

__all__ = [
    "KeyValueBackend",
    "MemoryBackend",
    "PersistedConfigStore",
    "SQLiteBackend",
    "StoreKey",
    "STORAGE_KEYS",
]
