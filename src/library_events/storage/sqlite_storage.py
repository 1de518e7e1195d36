"""SQLite-backed collection storage."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any, List, Mapping, Optional, Sequence

from library_events.domain.exceptions import PersistenceError
from library_events.domain.interfaces import IRecordStorage

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS collections (
    key TEXT PRIMARY KEY,
    payload TEXT NOT NULL
);
"""

_UPSERT_SQL = """
INSERT INTO collections (key, payload)
VALUES (?, ?)
ON CONFLICT(key) DO UPDATE SET
    payload=excluded.payload;
"""

_SELECT_SQL = """
SELECT payload
FROM collections
WHERE key = ?;
"""


class SQLiteStorage(IRecordStorage):
    """Lightweight storage focused on persistence only."""

    def __init__(self, db_path: str | Path):
        self._db_path = str(db_path)
        self._ensure_schema()

    def save(self, key: str, records: Sequence[Mapping[str, Any]]) -> None:
        payload = json.dumps([dict(record) for record in records])
        try:
            with sqlite3.connect(self._db_path) as conn:
                conn.execute(_UPSERT_SQL, (key, payload))
                conn.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(
                "Unable to save collection", context={"key": key, "db": self._db_path}
            ) from exc

    def load(self, key: str) -> Optional[List[Mapping[str, Any]]]:
        try:
            with sqlite3.connect(self._db_path) as conn:
                row = conn.execute(_SELECT_SQL, (key,)).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError(
                "Unable to load collection", context={"key": key, "db": self._db_path}
            ) from exc
        if row is None:
            return None
        return self._decode(key, row[0])

    def _ensure_schema(self) -> None:
        try:
            with sqlite3.connect(self._db_path) as conn:
                conn.execute(_CREATE_TABLE_SQL)
                conn.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(
                "Unable to initialise storage", context={"db": self._db_path}
            ) from exc

    @staticmethod
    def _decode(key: str, payload: str) -> List[Mapping[str, Any]]:
        try:
            records = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise PersistenceError("Stored collection is corrupt", context={"key": key}) from exc
        if not isinstance(records, list):
            raise PersistenceError("Stored collection is not a list", context={"key": key})
        return records
