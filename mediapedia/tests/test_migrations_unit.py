from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from mediapedia.core.storage import HISTORY_TABLE, MIGRATIONS, Migration, MigrationLog, MigrationRunner
from mediapedia.core.utils.exceptions import MigrationFailure


V1 = Migration(1, "create movies", "CREATE TABLE movies (id INTEGER PRIMARY KEY, title TEXT NOT NULL);")
V2 = Migration(2, "add year", "ALTER TABLE movies ADD COLUMN year INTEGER;")
V3 = Migration(
    3,
    "people's table",
    """
    CREATE TABLE people (id INTEGER PRIMARY KEY, name TEXT NOT NULL);
    CREATE INDEX idx_people_name ON people(name);
    """,
)
V2_BROKEN = Migration(
    2,
    "half-applied change",
    """
    CREATE TABLE ratings (id INTEGER PRIMARY KEY);
    ALTER TABLE no_such_table ADD COLUMN nope INTEGER;
    """,
)


def _tables(db: Path) -> set[str]:
    with sqlite3.connect(db) as conn:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {r[0] for r in rows if not r[0].startswith("sqlite_")}


def _columns(db: Path, table: str) -> list[str]:
    with sqlite3.connect(db) as conn:
        return [r[1] for r in conn.execute(f"PRAGMA table_info({table})").fetchall()]


def _history(db: Path) -> list[tuple[int, str]]:
    with sqlite3.connect(db) as conn:
        return conn.execute(f"SELECT version, description FROM {HISTORY_TABLE} ORDER BY version").fetchall()


class TestMigrationLog:
    def test_versions_must_start_at_one_and_be_contiguous(self) -> None:
        with pytest.raises(ValueError):
            MigrationLog([V2])
        with pytest.raises(ValueError):
            MigrationLog([V1, V3])

    def test_append_only_next_version(self) -> None:
        log = MigrationLog([V1])
        log.append(V2)

        assert log.latest_version == 2
        with pytest.raises(ValueError):
            log.append(Migration(2, "dup", "SELECT 1;"))

    def test_pending_after_version(self) -> None:
        log = MigrationLog([V1, V2, V3])

        assert [m.version for m in log.pending(0)] == [1, 2, 3]
        assert [m.version for m in log.pending(1)] == [2, 3]
        assert log.pending(3) == []

    def test_log_exposes_no_mutation_besides_append(self) -> None:
        log = MigrationLog([V1])

        assert not hasattr(log, "remove")
        assert not hasattr(log, "replace")
        assert not hasattr(log, "__setitem__")

    @pytest.mark.parametrize("version", [0, -1, True])
    def test_migration_rejects_bad_versions(self, version) -> None:
        with pytest.raises(ValueError):
            Migration(version, "bad", "SELECT 1;")

    def test_migration_is_forward_only(self) -> None:
        with pytest.raises(ValueError):
            Migration(1, "down", "DROP TABLE movies;", kind="down")


class TestMigrationRunner:
    def test_fresh_store_reports_version_zero(self, tmp_path) -> None:
        runner = MigrationRunner(tmp_path / "fresh.db", [V1])

        assert runner.current_version() == 0
        assert [m.version for m in runner.pending()] == [1]

    def test_fresh_store_gets_cumulative_schema(self, tmp_path) -> None:
        db = tmp_path / "catalog.db"
        runner = MigrationRunner(db, [V1, V2, V3])

        applied = runner.run()

        assert applied == [1, 2, 3]
        assert runner.current_version() == 3
        assert _tables(db) == {"movies", "people", HISTORY_TABLE}
        assert _columns(db, "movies") == ["id", "title", "year"]
        assert _history(db) == [(1, "create movies"), (2, "add year"), (3, "people's table")]

    def test_second_run_is_a_no_op(self, tmp_path) -> None:
        db = tmp_path / "catalog.db"
        MigrationRunner(db, [V1, V2, V3]).run()

        again = MigrationRunner(db, [V1, V2, V3])

        assert again.run() == []
        assert again.current_version() == 3
        assert len(_history(db)) == 3

    def test_applies_only_newer_versions_in_order(self, tmp_path) -> None:
        db = tmp_path / "catalog.db"
        MigrationRunner(db, [V1]).run()

        applied = MigrationRunner(db, [V1, V2, V3]).run()

        assert applied == [2, 3]
        assert [v for v, _ in _history(db)] == [1, 2, 3]

    def test_failed_migration_leaves_store_at_previous_version(self, tmp_path) -> None:
        db = tmp_path / "catalog.db"
        MigrationRunner(db, [V1]).run()

        runner = MigrationRunner(db, [V1, V2_BROKEN, V3])
        with pytest.raises(MigrationFailure) as excinfo:
            runner.run()

        assert excinfo.value.version == 2
        assert runner.current_version() == 1
        # Neither the partial DDL of 2 nor anything from 3 was kept.
        assert _tables(db) == {"movies", HISTORY_TABLE}

    def test_failure_is_retried_cleanly_after_fix(self, tmp_path) -> None:
        db = tmp_path / "catalog.db"
        with pytest.raises(MigrationFailure):
            MigrationRunner(db, [V1, V2_BROKEN]).run()

        # v2 never shipped successfully, so a corrected v2 is still pending.
        assert MigrationRunner(db, [V1, V2]).run() == [2]

    def test_edited_applied_migration_is_refused(self, tmp_path) -> None:
        db = tmp_path / "catalog.db"
        MigrationRunner(db, [V1]).run()

        edited = Migration(1, "create movies", "CREATE TABLE movies (id INTEGER PRIMARY KEY, name TEXT);")
        with pytest.raises(MigrationFailure, match="modified"):
            MigrationRunner(db, [edited, V2]).run()

        assert _columns(db, "movies") == ["id", "title"]

    def test_store_newer_than_build_is_refused(self, tmp_path) -> None:
        db = tmp_path / "catalog.db"
        MigrationRunner(db, [V1, V2]).run()

        with pytest.raises(MigrationFailure) as excinfo:
            MigrationRunner(db, [V1]).run()

        assert excinfo.value.version == 2

    def test_creates_missing_parent_directory(self, tmp_path) -> None:
        db = tmp_path / "nested" / "dir" / "catalog.db"

        MigrationRunner(db, [V1]).run()

        assert db.exists()


class TestShippedSchema:
    def test_shipped_log_starts_at_one(self) -> None:
        assert MIGRATIONS.latest_version >= 1
        assert [m.version for m in MIGRATIONS] == list(range(1, MIGRATIONS.latest_version + 1))

    def test_init_creates_catalog_tables(self, tmp_path) -> None:
        db = tmp_path / "mediapedia.db"

        MigrationRunner(db, MIGRATIONS).run()

        assert {"titles", "recent_searches", "settings", "trending_seed"} <= _tables(db)
        assert "cast" in _columns(db, "titles")
        assert "tmdb_rank" in _columns(db, "trending_seed")

    def test_init_schema_accepts_catalog_writes(self, tmp_path) -> None:
        db = tmp_path / "mediapedia.db"
        MigrationRunner(db, MIGRATIONS).run()

        with sqlite3.connect(db) as conn:
            conn.execute(
                "INSERT INTO settings (key, value, created_at, updated_at) VALUES (?, ?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
                ("theme", "dark", 1, 1),
            )
            conn.execute(
                "INSERT INTO recent_searches (query, created_at, updated_at) VALUES (?, ?, ?)",
                ("alien", 1, 1),
            )
            value = conn.execute("SELECT value FROM settings WHERE key = 'theme'").fetchone()[0]

        assert value == "dark"
