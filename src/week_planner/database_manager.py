from __future__ import annotations

"""Local SQLite store and migrations for Week Planner.

The planner only needs a key-value table: the activity collection lives under
a single ``activities`` key as a JSON array, next to the UI settings. Schema
changes are functions in the MIGRATIONS list; applied versions are tracked in
the ``schema_migrations`` table.

Idempotency: ``init_db`` can be safely called multiple times.
"""

from contextlib import contextmanager
from dataclasses import dataclass
import logging
from pathlib import Path
import sqlite3
from typing import Callable, Iterable, Iterator

_log = logging.getLogger(__name__)

Migration = Callable[[sqlite3.Connection], None]


@dataclass(slots=True)
class DBConfig:
    path: Path
    pragmas: tuple[tuple[str, str | int], ...] = (
        ("journal_mode", "WAL"),
        ("synchronous", "NORMAL"),
    )


class DatabaseManager:
    def __init__(self, config: DBConfig):
        self.config = config
        self._conn: sqlite3.Connection | None = None

    # --- Connection -------------------------------------------------------
    def connect(self) -> sqlite3.Connection:
        if self._conn is None:
            self.config.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.config.path)
            conn.row_factory = sqlite3.Row
            for key, value in self.config.pragmas:
                conn.execute(f"PRAGMA {key}={value}")
            self._conn = conn
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Commit on success, roll back if the body raises."""
        conn = self.connect()
        with conn:
            yield conn

    # --- Migrations -------------------------------------------------------
    def init_db(self) -> None:
        with self.transaction() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS schema_migrations (
                    version INTEGER PRIMARY KEY,
                    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ','now'))
                )
                """
            )
        pending = [
            (version, fn)
            for version, fn in enumerate(MIGRATIONS, start=1)
            if version not in self.applied_versions()
        ]
        for version, fn in pending:
            with self.transaction() as conn:
                fn(conn)
                conn.execute("INSERT INTO schema_migrations (version) VALUES (?)", (version,))
            _log.info("migration applied", extra={"_json_version": version, "_json_name": fn.__name__})

    def applied_versions(self) -> set[int]:
        rows = self.query_all("SELECT version FROM schema_migrations")
        return {row[0] for row in rows}

    # --- Queries ----------------------------------------------------------
    def execute(self, sql: str, params: Iterable | None = None) -> sqlite3.Cursor:
        return self.connect().execute(sql, tuple(params or ()))

    def query_all(self, sql: str, params: Iterable | None = None) -> list[sqlite3.Row]:
        return self.execute(sql, params).fetchall()

    def query_one(self, sql: str, params: Iterable | None = None) -> sqlite3.Row | None:
        return self.execute(sql, params).fetchone()


# --- Migration definitions --------------------------------------------------

def migration_001_create_settings_table(conn: sqlite3.Connection) -> None:
    # Activities are stored here too, under the "activities" key.
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
        """
    )


MIGRATIONS: list[Migration] = [
    migration_001_create_settings_table,
]

__all__ = [
    "DBConfig",
    "DatabaseManager",
    "MIGRATIONS",
]
