"""SQLite-backed key-value store."""

import sqlite3
from dataclasses import dataclass
from pathlib import Path

from ..core.ports import KeyValueStore


@dataclass
class SQLiteStore(KeyValueStore):
    """
    One ``kv`` table in a single database file. Each collection is one row;
    a write replaces the whole row inside a transaction.
    """

    db_path: Path

    def __post_init__(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    def _conn(self) -> sqlite3.Connection:
        """Get a connection to the SQLite database."""
        conn = sqlite3.connect(str(self.db_path))
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA synchronous=NORMAL")
        return conn

    def _init_schema(self) -> None:
        conn = self._conn()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def read_raw(self, key: str) -> str | None:
        conn = self._conn()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None
        finally:
            conn.close()

    def write_raw(self, key: str, contents: str) -> None:
        conn = self._conn()
        try:
            with conn:
                conn.execute(
                    "INSERT INTO kv (key, value) VALUES (?, ?) "
                    "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                    (key, contents),
                )
        finally:
            conn.close()
