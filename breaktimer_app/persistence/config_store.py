"""Key-value persistence for timer state that must survive restarts."""

import asyncio
import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional

import aiosqlite

from ..errors import PersistenceError
from ..logging.config import get_logger


class StoreKey(str, Enum):
    """Logical keys persisted by the timer."""
    START = "start"
    WORK = "work"
    DESCRIPTION = "description"
    PERMISSION = "permission"


# Storage key names are part of the on-disk format
STORAGE_KEYS = {
    StoreKey.START: "startTimeForTimer",
    StoreKey.WORK: "workTimeForTimer",
    StoreKey.DESCRIPTION: "issue",
    StoreKey.PERMISSION: "notificationPermission",
}

MIN_VALID_FIELDS = 1


class KeyValueBackend(ABC):
    """Raw storage. Implementations raise PersistenceError on failure."""

    @abstractmethod
    async def get_item(self, key: str) -> Any:
        pass

    @abstractmethod
    async def set_item(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    async def remove_item(self, key: str) -> None:
        pass

    @abstractmethod
    async def length(self) -> int:
        pass

    @abstractmethod
    async def clear(self) -> None:
        pass


class MemoryBackend(KeyValueBackend):
    """Dictionary backend for tests and ephemeral runs."""

    def __init__(self, initial: Optional[dict[str, Any]] = None):
        self.items: dict[str, Any] = dict(initial or {})

    async def get_item(self, key: str) -> Any:
        return self.items.get(key)

    async def set_item(self, key: str, value: Any) -> None:
        self.items[key] = value

    async def remove_item(self, key: str) -> None:
        self.items.pop(key, None)

    async def length(self) -> int:
        return len(self.items)

    async def clear(self) -> None:
        self.items.clear()


class SQLiteBackend(KeyValueBackend):
    """SQLite-based backend; values are stored as JSON text."""

    def __init__(self, db_path: str = "breaktimer.db", namespace: str = "breaktimer"):
        self.db_path = Path(db_path)
        self.namespace = namespace
        self._schema_ready = False

    async def _connect(self) -> aiosqlite.Connection:
        db = await aiosqlite.connect(self.db_path)
        try:
            await db.execute("PRAGMA busy_timeout=5000")
            if not self._schema_ready:
                await db.execute("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        namespace TEXT NOT NULL,
                        key TEXT NOT NULL,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL,
                        PRIMARY KEY (namespace, key)
                    )
                """)
                await db.commit()
                self._schema_ready = True
        except aiosqlite.Error:
            await db.close()
            raise
        return db

    async def get_item(self, key: str) -> Any:
        try:
            db = await self._connect()
            try:
                cursor = await db.execute(
                    "SELECT value FROM kv_store WHERE namespace = ? AND key = ?",
                    (self.namespace, key)
                )
                row = await cursor.fetchone()
            finally:
                await db.close()
            return json.loads(row[0]) if row else None
        except (aiosqlite.Error, OSError, ValueError) as e:
            raise PersistenceError(str(e), operation="get", target=key) from e

    async def set_item(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value)
            now = datetime.now(timezone.utc).isoformat()
            db = await self._connect()
            try:
                await db.execute("""
                    INSERT OR REPLACE INTO kv_store (namespace, key, value, updated_at)
                    VALUES (?, ?, ?, ?)
                """, (self.namespace, key, payload, now))
                await db.commit()
            finally:
                await db.close()
        except (aiosqlite.Error, OSError, TypeError, ValueError) as e:
            raise PersistenceError(str(e), operation="set", target=key) from e

    async def remove_item(self, key: str) -> None:
        try:
            db = await self._connect()
            try:
                await db.execute(
                    "DELETE FROM kv_store WHERE namespace = ? AND key = ?",
                    (self.namespace, key)
                )
                await db.commit()
            finally:
                await db.close()
        except (aiosqlite.Error, OSError) as e:
            raise PersistenceError(str(e), operation="remove", target=key) from e

    async def length(self) -> int:
        try:
            db = await self._connect()
            try:
                cursor = await db.execute(
                    "SELECT COUNT(*) FROM kv_store WHERE namespace = ?",
                    (self.namespace,)
                )
                row = await cursor.fetchone()
            finally:
                await db.close()
            return int(row[0])
        except (aiosqlite.Error, OSError) as e:
            raise PersistenceError(str(e), operation="length", target=self.namespace) from e

    async def clear(self) -> None:
        try:
            db = await self._connect()
            try:
                await db.execute(
                    "DELETE FROM kv_store WHERE namespace = ?", (self.namespace,)
                )
                await db.commit()
            finally:
                await db.close()
        except (aiosqlite.Error, OSError) as e:
            raise PersistenceError(str(e), operation="clear", target=self.namespace) from e


class PersistedConfigStore:
    """
    Asynchronous store for the timer's durable values.

    Every operation is best-effort: backend failures are logged here and
    surface to callers only as None (reads) or False (writes).

    Operations run one at a time in the order they were issued, so a
    ``set`` followed by a ``remove`` of the same key always ends removed.
    """

    def __init__(self, backend: KeyValueBackend):
        self.backend = backend
        self.logger = get_logger("breaktimer.store")
        self._lock: Optional[asyncio.Lock] = None

    @classmethod
    def sqlite(cls, db_path: str = "breaktimer.db",
               namespace: str = "breaktimer") -> "PersistedConfigStore":
        """Create a store persisting to a SQLite file."""
        return cls(SQLiteBackend(db_path=db_path, namespace=namespace))

    @classmethod
    def in_memory(cls, initial: Optional[dict[str, Any]] = None) -> "PersistedConfigStore":
        """Create a non-durable store."""
        return cls(MemoryBackend(initial))

    def _serialized(self) -> asyncio.Lock:
        # Created on first use so it binds to the loop that runs the store
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    async def get(self, key: StoreKey) -> Any:
        """Read a logical key; None when absent or unreadable."""
        storage_key = STORAGE_KEYS[StoreKey(key)]
        async with self._serialized():
            try:
                return await self.backend.get_item(storage_key)
            except PersistenceError as e:
                self.logger.error(
                    "Failed to read key",
                    key=storage_key,
                    operation=e.operation,
                    error=str(e)
                )
                return None

    async def set(self, key: StoreKey, value: Any) -> bool:
        """Write a logical key. Returns False when the write failed."""
        storage_key = STORAGE_KEYS[StoreKey(key)]
        async with self._serialized():
            try:
                await self.backend.set_item(storage_key, value)
            except PersistenceError as e:
                self.logger.error(
                    "Failed to write key",
                    key=storage_key,
                    operation=e.operation,
                    error=str(e)
                )
                return False

        self.logger.debug("Key stored", key=storage_key, value=value)
        return True

    async def remove(self, key: StoreKey) -> bool:
        """Remove a logical key. Returns False when the removal failed."""
        storage_key = STORAGE_KEYS[StoreKey(key)]
        async with self._serialized():
            try:
                await self.backend.remove_item(storage_key)
            except PersistenceError as e:
                self.logger.error(
                    "Failed to remove key",
                    key=storage_key,
                    operation=e.operation,
                    error=str(e)
                )
                return False

        self.logger.debug("Key removed", key=storage_key)
        return True

    async def get_description(self) -> Optional[str]:
        value = await self.get(StoreKey.DESCRIPTION)
        return value if isinstance(value, str) else None

    async def set_description(self, description: str) -> bool:
        return await self.set(StoreKey.DESCRIPTION, description)

    async def has_description(self) -> bool:
        return bool(await self.get_description())

    async def has_entries(self) -> bool:
        """Whether at least one value has been persisted."""
        async with self._serialized():
            try:
                return await self.backend.length() >= MIN_VALID_FIELDS
            except PersistenceError as e:
                self.logger.error("Failed to count entries", error=str(e))
                return False

    async def reset_all(self) -> bool:
        """Remove every persisted value."""
        async with self._serialized():
            try:
                await self.backend.clear()
            except PersistenceError as e:
                self.logger.error("Failed to clear store", error=str(e))
                return False

        self.logger.info("Store cleared")
        return True
