"""Database migration utilities.

Handles schema evolution by applying idempotent migrations keyed by an integer
`schema_version` stored in the metadata table. Version 1 is the base table set
created by `init_db`; version 2 adds the history indexes used by the ledger
listing queries.
"""

from __future__ import annotations
from pathlib import Path
import sqlite3
from typing import Optional

from . import schema as schema_def
from .schema import init_db

CURRENT_SCHEMA_VERSION = 2
SCHEMA_VERSION_KEY = "schema_version"

HISTORY_INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_transactions_account_created "
    "ON transactions(account_id, created_at);",
    "CREATE INDEX IF NOT EXISTS idx_transactions_account_type "
    "ON transactions(account_id, type);",
    "CREATE INDEX IF NOT EXISTS idx_conversions_account_created "
    "ON conversions(account_id, created_at);",
    "CREATE INDEX IF NOT EXISTS idx_investments_account "
    "ON investments(account_id);",
)


def get_schema_version(conn: sqlite3.Connection) -> Optional[int]:
    try:
        cur = conn.cursor()
        cur.execute("SELECT value FROM metadata WHERE key=?", (SCHEMA_VERSION_KEY,))
        row = cur.fetchone()
        if row:
            return int(row[0])
    except sqlite3.OperationalError:
        # metadata table may not exist yet (first run before init_db)
        return None
    return None


def apply_migrations(db_path: Path) -> int:
    """Apply required migrations and return resulting schema version."""
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    try:
        version = get_schema_version(conn) or 1
        if version < 2:
            _migrate_to_v2(conn)
            version = 2
        _set_schema_version(conn, version)
        conn.commit()
        return version
    finally:
        conn.close()


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    cur = conn.cursor()
    cur.execute(
        "INSERT INTO metadata (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
        f"updated_at=({schema_def.BASIC_UTC_NOW})",
        (SCHEMA_VERSION_KEY, str(version)),
    )


def _migrate_to_v2(conn: sqlite3.Connection) -> None:
    """Upgrade schema to version 2 (history indexes)."""
    cur = conn.cursor()
    try:
        for ddl in HISTORY_INDEXES:
            cur.execute(ddl)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
