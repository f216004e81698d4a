"""The catalog schema as shipped, one migration per version.

Append new versions at the end. Never edit a migration that has shipped:
stores that already applied it would silently diverge from fresh installs
(the runner refuses to start when a checksum changes).
"""

from __future__ import annotations

from .migrations import Migration, MigrationLog

_V1_INIT = """
CREATE TABLE IF NOT EXISTS titles (
    id TEXT PRIMARY KEY,
    imdb_id TEXT,
    tmdb_id INTEGER,
    title TEXT NOT NULL,
    year TEXT,
    type TEXT NOT NULL,
    runtime TEXT,
    rating TEXT,
    votes INTEGER,
    poster_url TEXT,
    backdrop_url TEXT,
    genres TEXT,                    -- JSON array
    plot TEXT,
    "cast" TEXT,
    director TEXT,
    country TEXT,
    language TEXT,
    rotten_tomatoes_score TEXT,
    metacritic_score TEXT,
    popularity REAL,
    source TEXT,                    -- omdb | tmdb | cache | mixed
    tmdb_rank INTEGER,
    tmdb_trending_at INTEGER,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL,
    expires_at INTEGER
);

CREATE INDEX IF NOT EXISTS idx_titles_imdb_id ON titles(imdb_id);
CREATE INDEX IF NOT EXISTS idx_titles_tmdb_id ON titles(tmdb_id);

CREATE TABLE IF NOT EXISTS recent_searches (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    query TEXT NOT NULL,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS trending_seed (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    year TEXT,
    type TEXT NOT NULL,
    poster_url TEXT,
    tmdb_rank INTEGER,
    popularity REAL,
    created_at INTEGER NOT NULL,
    updated_at INTEGER NOT NULL
);
"""


MIGRATIONS = MigrationLog(
    [
        Migration(version=1, description="init", sql=_V1_INIT),
    ]
)
