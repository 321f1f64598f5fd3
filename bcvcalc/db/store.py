"""SQLite-backed key/value store for durable preferences."""

from __future__ import annotations

from pathlib import Path
import sqlite3
from typing import Optional

from .schema import BASIC_UTC_NOW


class SqliteKeyValueStore:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def get(self, key: str) -> Optional[str]:
        conn = self._connect()
        try:
            cur = conn.cursor()
            cur.execute("SELECT value FROM metadata WHERE key=?", (key,))
            row = cur.fetchone()
            return row[0] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            conn.execute(
                "INSERT INTO metadata(key,value) VALUES(?,?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
                f"updated_at=({BASIC_UTC_NOW})",
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()
