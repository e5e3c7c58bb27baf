"""
Key-value persistence for harkit settings and the page map.

Components that persist state receive a store explicitly instead of reaching
for module-level globals. Two implementations are provided:

- SQLiteStore: durable, a single ``kv`` table in a SQLite file
- MemoryStore: ephemeral, an in-process dict

``open_store`` picks one at construction time and degrades to MemoryStore
when the durable file cannot be opened.

Values are JSON-serializable Python objects; both stores hand out copies so
callers can mutate what they get without touching stored state.
"""

import copy
import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from harkit.core.config import get_default_store_path

logger = logging.getLogger(__name__)


KV_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal get/set/delete interface shared by all stores."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def delete(self, key: str) -> None:
        ...


class MemoryStore:
    """
    Ephemeral in-process store.

    Used when durable storage is unavailable or explicitly not wanted
    (tests, ``--ephemeral`` CLI runs).
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def close(self) -> None:
        """No-op; present for interface parity with SQLiteStore."""


class SQLiteStore:
    """
    Durable key-value store backed by SQLite.

    Attributes
    ----------
    db_path : Path
        Path to the SQLite database file
    _conn : sqlite3.Connection
        SQLite connection with WAL mode enabled

    Example
    -------
    >>> store = SQLiteStore(Path("/tmp/harkit.db"))
    >>> store.set("harkit_filtered_headers", ["priority"])
    >>> store.get("harkit_filtered_headers")
    ['priority']
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize the store, creating the file and schema if needed.

        Parameters
        ----------
        db_path : Path, optional
            Path to the database file. If None, uses the configured default.

        Raises
        ------
        sqlite3.Error, OSError
            If the database cannot be created or opened.
        """
        if db_path is None:
            db_path = get_default_store_path()

        self.db_path = Path(db_path)
        self._conn: Optional[sqlite3.Connection] = None
        self._connect()
        self._ensure_schema()

    def _connect(self) -> None:
        """Establish database connection with WAL mode."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._conn = sqlite3.connect(str(self.db_path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row

        cursor = self._conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.fetchone()

        logger.debug("Store connection established: %s", self.db_path)

    def _ensure_schema(self) -> None:
        cursor = self._conn.cursor()
        cursor.executescript(KV_SCHEMA)
        self._conn.commit()

    @property
    def connection(self) -> sqlite3.Connection:
        """Get the underlying SQLite connection."""
        if self._conn is None:
            self._connect()
        return self._conn

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get the value stored under ``key``.

        A row whose JSON cannot be decoded is treated as absent.
        """
        cursor = self.connection.cursor()
        cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
        row = cursor.fetchone()
        if row is None:
            return default

        try:
            return json.loads(row["value"])
        except json.JSONDecodeError as e:
            logger.warning("Discarding corrupt value for key %s: %s", key, e)
            return default

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        cursor = self.connection.cursor()
        cursor.execute(
            """
            INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,
            (key, json.dumps(value), datetime.now(timezone.utc).isoformat()),
        )
        self.connection.commit()

    def delete(self, key: str) -> None:
        cursor = self.connection.cursor()
        cursor.execute("DELETE FROM kv WHERE key = ?", (key,))
        self.connection.commit()

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.debug("Store connection closed")


def open_store(db_path: Optional[Path] = None, ephemeral: bool = False) -> KeyValueStore:
    """
    Open the store used by the CLI and API.

    Parameters
    ----------
    db_path : Path, optional
        SQLite file to use; defaults to the configured location
    ephemeral : bool
        If True, skip durable storage entirely

    Returns
    -------
    KeyValueStore
        A SQLiteStore, or a MemoryStore when ephemeral is requested or the
        durable file cannot be opened
    """
    if ephemeral:
        return MemoryStore()

    try:
        return SQLiteStore(db_path)
    except (sqlite3.Error, OSError) as e:
        logger.warning("Durable store unavailable (%s), using in-memory storage", e)
        return MemoryStore()
