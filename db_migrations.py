import sqlite3
import time
from dataclasses import dataclass
from typing import Callable, List


@dataclass(frozen=True)
class Migration:
    migration_id: str
    description: str
    apply: Callable[[sqlite3.Connection], None]


def _table_columns(conn: sqlite3.Connection, table: str) -> set[str]:
    rows = conn.execute(f"PRAGMA table_info({table});").fetchall()
    return {str(r["name"]) for r in rows}


def _safe_add_column(conn: sqlite3.Connection, table: str, name: str, coltype: str) -> None:
    if name in _table_columns(conn, table):
        return
    conn.execute(f"ALTER TABLE {table} ADD COLUMN {name} {coltype};")


def _migration_0001_local_storage(conn: sqlite3.Connection) -> None:
    conn.executescript(
        """
        CREATE TABLE IF NOT EXISTS local_storage (
          key TEXT PRIMARY KEY,
          value TEXT NOT NULL
        );
        """
    )


def _migration_0002_local_storage_updated_at(conn: sqlite3.Connection) -> None:
    """Track when each key was last written."""
    _safe_add_column(conn, "local_storage", "updated_at", "REAL NOT NULL DEFAULT 0")


def _migrations() -> List[Migration]:
    return [
        Migration("0001_local_storage", "Create key-value local storage table", _migration_0001_local_storage),
        Migration("0002_local_storage_updated_at", "Add updated_at column to local storage", _migration_0002_local_storage_updated_at),
    ]


def apply_migrations(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
          migration_id TEXT PRIMARY KEY,
          description TEXT NOT NULL,
          applied_at REAL NOT NULL
        );
        """
    )

    applied = {
        str(r["migration_id"])
        for r in conn.execute("SELECT migration_id FROM schema_migrations").fetchall()
    }

    for migration in _migrations():
        if migration.migration_id in applied:
            continue
        migration.apply(conn)
        conn.execute(
            "INSERT INTO schema_migrations (migration_id,description,applied_at) VALUES (?,?,?)",
            (migration.migration_id, migration.description, time.time()),
        )
    conn.commit()
