# kv_store.py
from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional, Protocol

from cineVault.settings import DATABASE_PATH as _DB_PATH

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
)
"""


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...
    def set(self, key: str, value: str) -> None: ...


class SQLiteKVStore:
    """
    String → string store backed by one SQLite table.

    Every `set` is a single upsert committed in its own transaction, so a
    reader sees either the previous value or the new one, never a mix.
    """

    def __init__(self, path: Path | str = _DB_PATH):
        self.path = path
        self._conn: sqlite3.Connection | None = None

    # ─── internal helpers ────────────────────────────────────────────────
    def _connection(self) -> sqlite3.Connection:
        """Open the database on first use and create the table once."""
        if self._conn is None:
            if str(self.path) != ":memory:":
                Path(self.path).parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.path)
            conn.row_factory = sqlite3.Row
            with conn:
                conn.execute(_SCHEMA)
            self._conn = conn
        return self._conn

    # ─── public helpers ──────────────────────────────────────────────────
    def get(self, key: str) -> Optional[str]:
        row = self._connection().execute(
            "SELECT value FROM kv WHERE key = ?", (key,)
        ).fetchone()
        return None if row is None else str(row["value"])

    def set(self, key: str, value: str) -> None:
        conn = self._connection()
        with conn:
            conn.execute(
                """
                INSERT INTO kv(key, value) VALUES(?, ?)
                ON CONFLICT(key) DO UPDATE SET value=excluded.value
                """,
                (key, value),
            )

    def delete(self, key: str) -> None:
        conn = self._connection()
        with conn:
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
