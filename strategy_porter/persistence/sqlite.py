from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Protocol

SCHEMA: dict[str, str] = {
    "kv_store": (
        """
        CREATE TABLE IF NOT EXISTS kv_store (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_utc TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ', 'now'))
        )
        """
    ),
}


class KeyValueStore(Protocol):
    """String-to-string store; absent keys read as None."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return sqlite3.connect(db_path)


def ensure_schema(conn: sqlite3.Connection) -> None:
    cur = conn.cursor()
    for sql in SCHEMA.values():
        cur.execute(sql)
    conn.commit()


class SqliteKeyValueStore:
    """Persistent key-value store backed by a single SQLite table.

    No locking beyond SQLite's own: concurrent writers to the same key are
    last-write-wins.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = Path(db_path)
        conn = connect(self.db_path)
        try:
            ensure_schema(conn)
        finally:
            conn.close()

    def get_item(self, key: str) -> str | None:
        conn = connect(self.db_path)
        try:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        finally:
            conn.close()
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        conn = connect(self.db_path)
        try:
            conn.execute(
                """
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value=excluded.value,
                    updated_utc=strftime('%Y-%m-%dT%H:%M:%SZ', 'now')
                """,
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()

    def remove_item(self, key: str) -> None:
        conn = connect(self.db_path)
        try:
            conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()
