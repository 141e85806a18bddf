"""
Reader-local key-value storage for progress and quiz state.

Stores whole per-document state blobs (JSON values) keyed by slug:
- MemoryStore: session-only, used as default and in tests
- SQLiteStore: durable store in ~/.learnhub/progress.db

State lives separately from content so that content can be updated
without losing what the reader has done.
"""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from learnhub.config import DEFAULT_STATE_DB

from .errors import PersistenceError


logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    Storage port used by ProgressTracker and QuizEngine.

    Values must be JSON-serializable. Adapters raise PersistenceError when
    the underlying storage fails.
    """

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any):
        raise NotImplementedError

    def delete(self, key: str):
        raise NotImplementedError

    def clear(self):
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    """In-process store. Values are kept serialized so callers never share mutable state."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        return json.loads(raw) if raw is not None else None

    def set(self, key: str, value: Any):
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Value for '{key}' is not serializable: {e}") from e

    def delete(self, key: str):
        self._data.pop(key, None)

    def clear(self):
        self._data.clear()

    def __len__(self):
        return len(self._data)


class SQLiteStore(KeyValueStore):
    """
    Durable store backed by a SQLite file.

    Several stores can share one file; each one only sees rows in its own
    namespace (e.g. "progress" and "quiz").
    """

    def __init__(self, db_path: Optional[str | Path] = None, namespace: str = "progress"):
        """
        Initialize the store, creating the database file if needed.

        Args:
            db_path: Path to the database (default: ~/.learnhub/progress.db)
            namespace: Row namespace for this store

        Raises:
            PersistenceError: If the database cannot be created
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_STATE_DB
        self.namespace = namespace
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
            try:
                conn.executescript("""
                    CREATE TABLE IF NOT EXISTS kv_store (
                        namespace TEXT NOT NULL,
                        key TEXT NOT NULL,
                        value TEXT NOT NULL,
                        updated_at TEXT NOT NULL,
                        PRIMARY KEY (namespace, key)
                    );
                """)
                conn.commit()
            finally:
                conn.close()
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Cannot open state database {self.db_path}: {e}") from e

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def get(self, key: str) -> Optional[Any]:
        try:
            conn = self._get_connection()
            try:
                cursor = conn.execute(
                    "SELECT value FROM kv_store WHERE namespace = ? AND key = ?",
                    (self.namespace, key)
                )
                row = cursor.fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot read '{key}' from {self.db_path}: {e}") from e

        if not row:
            return None
        try:
            return json.loads(row["value"])
        except ValueError as e:
            raise PersistenceError(f"Stored value for '{key}' is not valid JSON: {e}") from e

    def set(self, key: str, value: Any):
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Value for '{key}' is not serializable: {e}") from e

        try:
            conn = self._get_connection()
            try:
                now = datetime.now().isoformat()
                conn.execute(
                    """INSERT INTO kv_store (namespace, key, value, updated_at)
                       VALUES (?, ?, ?, ?)
                       ON CONFLICT(namespace, key) DO UPDATE SET
                         value = excluded.value,
                         updated_at = excluded.updated_at""",
                    (self.namespace, key, payload, now)
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot write '{key}' to {self.db_path}: {e}") from e

    def delete(self, key: str):
        try:
            conn = self._get_connection()
            try:
                conn.execute(
                    "DELETE FROM kv_store WHERE namespace = ? AND key = ?",
                    (self.namespace, key)
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot delete '{key}' from {self.db_path}: {e}") from e

    def clear(self):
        try:
            conn = self._get_connection()
            try:
                conn.execute("DELETE FROM kv_store WHERE namespace = ?", (self.namespace,))
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot clear {self.namespace} in {self.db_path}: {e}") from e


def open_store(db_path: Optional[str | Path] = None, namespace: str = "progress") -> KeyValueStore:
    """
    Open a durable store, falling back to a MemoryStore if it is unavailable.

    The fallback keeps the app usable; state is then lost when the session ends.
    """
    try:
        return SQLiteStore(db_path, namespace=namespace)
    except PersistenceError as e:
        logger.warning(f"Reader state will not survive this session: {e}")
        return MemoryStore()
