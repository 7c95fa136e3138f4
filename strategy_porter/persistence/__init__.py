from __future__ import annotations

from .sqlite import KeyValueStore, SqliteKeyValueStore, connect, ensure_schema

__all__ = [
    "KeyValueStore",
    "SqliteKeyValueStore",
    "connect",
    "ensure_schema",
]
