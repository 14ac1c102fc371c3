"""
Key-value store backing the mock API.

Values are JSON text under string keys, one row per key in the
``local_storage`` table. Writes do not commit on their own; callers group
them with ``transaction()``.
"""

import json
import sqlite3
import time
from contextlib import contextmanager
from typing import Any, Generator, List, Optional


class LocalStorage:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get_item(self, key: str) -> Optional[str]:
        row = self.conn.execute("SELECT value FROM local_storage WHERE key=?", (key,)).fetchone()
        return str(row["value"]) if row else None

    def set_item(self, key: str, value: str) -> None:
        self.conn.execute(
            """
            INSERT INTO local_storage (key,value,updated_at) VALUES (?,?,?)
            ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at
            """,
            (key, value, time.time()),
        )

    def remove_item(self, key: str) -> None:
        self.conn.execute("DELETE FROM local_storage WHERE key=?", (key,))

    def keys(self) -> List[str]:
        return [str(r["key"]) for r in self.conn.execute("SELECT key FROM local_storage ORDER BY key").fetchall()]

    def clear(self) -> None:
        self.conn.execute("DELETE FROM local_storage")

    def get_json(self, key: str, default: Any = None) -> Any:
        raw = self.get_item(key)
        if raw is None:
            return default
        return json.loads(raw)

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value, separators=(",", ":")))

    @contextmanager
    def transaction(self) -> Generator["LocalStorage", None, None]:
        """Run a read-modify-write under one write lock.

        Nested use joins the outer transaction.
        """
        if self.conn.in_transaction:
            yield self
            return
        self.conn.execute("BEGIN IMMEDIATE")
        try:
            yield self
        except BaseException:
            self.conn.rollback()
            raise
        self.conn.commit()
