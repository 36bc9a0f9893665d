"""SQLiteStore — local database-backed key/value store.

Why SQLite as an alternative to the JSON file:
- Batteries included: ships with Python, no extra dependencies.
- Single-row upserts: writing one key does not rewrite every other key.
- Safe to share between several snipreview processes on one machine.

Schema:
  kv: one row per key, value stored as text.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from snipreview_store.base import BaseStore

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv (
    key     TEXT PRIMARY KEY,
    value   TEXT NOT NULL
);
"""


class SQLiteStore(BaseStore):
    """Stores keys in a local SQLite database file.

    The database file path defaults to `.snipreview.db` in the current working
    directory. Configure via .snipreview.yml: `store_path: /path/to/file.db`.
    """

    def __init__(self, db_path: str = ".snipreview.db"):
        self._conn = sqlite3.connect(db_path)
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def get(self, key: str) -> Optional[str]:
        row = self._conn.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        self._conn.execute(
            "INSERT INTO kv (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )
        self._conn.commit()

    def remove(self, key: str) -> None:
        self._conn.execute("DELETE FROM kv WHERE key=?", (key,))
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()
