"""Forward-only schema migrations for the local SQLite store.

A `MigrationLog` is append-only: shipped migrations are never edited or
removed, a schema change is always a new version. `MigrationRunner` applies
every migration newer than the store's recorded version, in order, each in
its own transaction together with its history row, so a version is recorded
if and only if its script committed.
"""

from __future__ import annotations

import hashlib
import logging
import sqlite3
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from ..utils.exceptions import MigrationFailure

logger = logging.getLogger(__name__)

HISTORY_TABLE = "_migrations"

_HISTORY_DDL = f"""
CREATE TABLE IF NOT EXISTS {HISTORY_TABLE} (
    version INTEGER PRIMARY KEY,
    description TEXT NOT NULL,
    checksum TEXT NOT NULL,
    installed_on INTEGER NOT NULL
)
"""


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    sql: str
    kind: str = "up"

    def __post_init__(self) -> None:
        if isinstance(self.version, bool) or not isinstance(self.version, int) or self.version < 1:
            raise ValueError(f"migration version must be an integer >= 1, got {self.version!r}")
        if self.kind != "up":
            raise ValueError(f"only forward ('up') migrations are supported, got {self.kind!r}")
        if not self.sql.strip():
            raise ValueError(f"migration {self.version} has an empty script")

    @property
    def checksum(self) -> str:
        return hashlib.sha256(self.sql.encode("utf-8")).hexdigest()


class MigrationLog:
    """Ordered, append-only sequence of migrations with versions 1..N."""

    def __init__(self, migrations: Iterable[Migration] = ()):
        self._migrations: list[Migration] = []
        for m in migrations:
            self.append(m)

    def append(self, migration: Migration) -> None:
        expected = self.latest_version + 1
        if migration.version != expected:
            raise ValueError(
                f"migration versions must be contiguous: expected {expected}, got {migration.version}"
            )
        self._migrations.append(migration)

    @property
    def latest_version(self) -> int:
        return self._migrations[-1].version if self._migrations else 0

    def get(self, version: int) -> Migration | None:
        if 1 <= version <= len(self._migrations):
            return self._migrations[version - 1]
        return None

    def pending(self, after: int) -> list[Migration]:
        return [m for m in self._migrations if m.version > after]

    def __iter__(self) -> Iterator[Migration]:
        return iter(tuple(self._migrations))

    def __len__(self) -> int:
        return len(self._migrations)


def _sql_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class MigrationRunner:
    """Bring a store from its recorded version to the latest shipped one.

    Not thread-safe; it runs once during startup before anything else can
    reach the database.
    """

    def __init__(self, database_path: str | Path, migrations: MigrationLog | Iterable[Migration], *, busy_timeout_s: float = 5.0):
        self.database_path = Path(database_path)
        self.migrations = migrations if isinstance(migrations, MigrationLog) else MigrationLog(migrations)
        self.busy_timeout_s = busy_timeout_s

    def _connect(self) -> sqlite3.Connection:
        self.database_path.parent.mkdir(parents=True, exist_ok=True)
        # Autocommit mode: transactions are opened explicitly per migration.
        conn = sqlite3.connect(str(self.database_path), timeout=self.busy_timeout_s, isolation_level=None)
        conn.execute(_HISTORY_DDL)
        return conn

    @staticmethod
    def _applied(conn: sqlite3.Connection) -> dict[int, str]:
        rows = conn.execute(f"SELECT version, checksum FROM {HISTORY_TABLE} ORDER BY version").fetchall()
        return {int(v): str(c) for v, c in rows}

    def current_version(self) -> int:
        conn = self._connect()
        try:
            row = conn.execute(f"SELECT MAX(version) FROM {HISTORY_TABLE}").fetchone()
        finally:
            conn.close()
        return int(row[0]) if row and row[0] is not None else 0

    def pending(self) -> list[Migration]:
        return self.migrations.pending(self.current_version())

    def _verify(self, applied: dict[int, str]) -> None:
        for version, checksum in applied.items():
            shipped = self.migrations.get(version)
            if shipped is None:
                raise MigrationFailure(
                    version,
                    f"store records version {version} but this build only knows 1..{self.migrations.latest_version}",
                )
            if shipped.checksum != checksum:
                raise MigrationFailure(version, "applied migration was modified after it shipped")

    def _apply(self, conn: sqlite3.Connection, migration: Migration) -> None:
        # executescript() commits any open transaction first, so BEGIN/COMMIT
        # are part of the script and the history row commits with the DDL.
        script = "\n".join(
            [
                "BEGIN;",
                migration.sql,
                ";",
                f"INSERT INTO {HISTORY_TABLE} (version, description, checksum, installed_on) VALUES "
                f"({migration.version}, {_sql_literal(migration.description)}, "
                f"{_sql_literal(migration.checksum)}, {int(time.time())});",
                "COMMIT;",
            ]
        )
        try:
            conn.executescript(script)
        except sqlite3.Error as exc:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise MigrationFailure(migration.version, str(exc)) from exc

    def run(self) -> list[int]:
        """Apply pending migrations; return the versions applied (possibly none).

        Stops at the first failure, which is raised as `MigrationFailure`; the
        store keeps the last successfully applied version.
        """

        try:
            conn = self._connect()
        except sqlite3.Error as exc:
            raise MigrationFailure(self.migrations.latest_version, f"cannot open {self.database_path}: {exc}") from exc

        applied_now: list[int] = []
        try:
            applied = self._applied(conn)
            self._verify(applied)
            current = max(applied, default=0)
            pending = self.migrations.pending(current)
            if not pending:
                logger.debug("Database %s is up to date at version %d", self.database_path, current)
                return applied_now

            for migration in pending:
                logger.info("Applying migration %d (%s)", migration.version, migration.description)
                self._apply(conn, migration)
                applied_now.append(migration.version)

            logger.info("Database %s migrated to version %d", self.database_path, applied_now[-1])
            return applied_now
        finally:
            conn.close()
