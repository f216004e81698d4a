"""Local catalog store: connection string resolution and schema migrations."""

from __future__ import annotations

from .database import database_path_from_url
from .migrations import HISTORY_TABLE, Migration, MigrationLog, MigrationRunner
from .schema import MIGRATIONS

__all__ = [
    "HISTORY_TABLE",
    "MIGRATIONS",
    "Migration",
    "MigrationLog",
    "MigrationRunner",
    "database_path_from_url",
]
