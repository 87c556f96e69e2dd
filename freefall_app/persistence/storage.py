"""Key-value storage backends for persisted history slots."""

import sqlite3
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import structlog

from ..errors import PersistenceError

logger = structlog.get_logger(__name__)


class KeyValueStorage(ABC):
    """String-to-string storage addressed by slot key."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under ``key``, or None if absent."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove ``key``; removing an absent key is a no-op."""
        pass


class MemoryStorage(KeyValueStorage):
    """Dict-backed storage for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class SqliteStorage(KeyValueStorage):
    """SQLite-based key-value storage."""

    def __init__(self, db_path: str = "freefall.db"):
        self.db_path = Path(db_path)
        self.logger = logger.bind(db_path=str(self.db_path))
        self._lock = threading.Lock()
        self._initialized = False

    def _init_database(self, conn: sqlite3.Connection) -> None:
        """Initialize database schema on first use."""
        if self._initialized:
            return
        conn.execute("""
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """)
        conn.commit()
        self._initialized = True

    @contextmanager
    def _get_connection(self):
        """Get database connection with proper error handling."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", error=str(e))
            raise
        finally:
            if conn:
                conn.close()

    def get_item(self, key: str) -> Optional[str]:
        try:
            with self._get_connection() as conn:
                self._init_database(conn)
                row = conn.execute(
                    "SELECT value FROM kv_store WHERE key = ?", (key,)
                ).fetchone()
                return row["value"] if row else None

        except sqlite3.Error as e:
            raise PersistenceError(
                f"Failed to read slot {key!r}: {e}",
                operation="get",
                target=key
            ) from e

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            try:
                with self._get_connection() as conn:
                    self._init_database(conn)
                    now = datetime.now(timezone.utc).isoformat()
                    conn.execute("""
                        INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)
                        ON CONFLICT(key) DO UPDATE SET
                            value = excluded.value,
                            updated_at = excluded.updated_at
                    """, (key, value, now))
                    conn.commit()

            except sqlite3.Error as e:
                raise PersistenceError(
                    f"Failed to write slot {key!r}: {e}",
                    operation="set",
                    target=key
                ) from e

    def remove_item(self, key: str) -> None:
        with self._lock:
            try:
                with self._get_connection() as conn:
                    self._init_database(conn)
                    conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
                    conn.commit()

            except sqlite3.Error as e:
                raise PersistenceError(
                    f"Failed to remove slot {key!r}: {e}",
                    operation="remove",
                    target=key
                ) from e
