"""Database schema DDL and initialization.

Tables:
  - metadata: key/value store for user preferences (currently only the theme)
"""

from __future__ import annotations
import sqlite3
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""


def init_db(db_path: Path) -> None:
    """Create tables if they do not exist (idempotent)."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(METADATA_DDL)
        conn.commit()
    finally:
        conn.close()
