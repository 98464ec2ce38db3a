"""
SQLite key-value storage — one row per snapshot key in the kv_store table.

set_item() upserts the row and stamps updated_at; remove_item() deletes it.
Values are stored as the exact string handed in, so the JSON written by
SnapshotPersistence round-trips byte for byte.
"""

import sqlite3
from datetime import datetime, timezone

from facility_booking.domain.storage import KeyValueStorage

_SCHEMA = """
CREATE TABLE IF NOT EXISTS kv_store (
    key         TEXT PRIMARY KEY,
    value       TEXT NOT NULL,
    updated_at  TEXT NOT NULL
);
"""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SqliteKeyValueStorage(KeyValueStorage):

    def __init__(self, db_path: str = "booking.db"):
        self._conn = sqlite3.connect(db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.executescript(_SCHEMA)

    def get_item(self, key: str) -> str | None:
        row = self._conn.execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        if not row:
            return None
        return row["value"]

    def set_item(self, key: str, value: str) -> None:
        self._conn.execute(
            "INSERT OR REPLACE INTO kv_store (key, value, updated_at) VALUES (?, ?, ?)",
            (key, value, _now()),
        )
        self._conn.commit()

    def remove_item(self, key: str) -> None:
        self._conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()
