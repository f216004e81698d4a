from __future__ import annotations

from pathlib import Path

_SQLITE_SCHEME = "sqlite:"


def database_path_from_url(url: str, base_dir: Path) -> Path:
    """Resolve a `sqlite:` connection string to a database file path.

    `sqlite:mediapedia.db` -> `base_dir/mediapedia.db`; absolute paths and
    `sqlite:///abs/path.db` are used as-is. In-memory databases are rejected:
    a migrated store that vanishes on exit is never what the app wants.
    """

    raw = str(url or "").strip()
    if not raw.startswith(_SQLITE_SCHEME):
        raise ValueError(f"unsupported database URL {url!r}; expected 'sqlite:<path>'")

    target = raw[len(_SQLITE_SCHEME):]
    if target.startswith("//"):
        target = target[2:]
    target = target.split("?", 1)[0]

    if not target or target in (":memory:", "memory:") or target.startswith(":memory"):
        raise ValueError(f"database URL {url!r} does not name a file")

    path = Path(target).expanduser()
    if not path.is_absolute():
        path = Path(base_dir) / path
    return path
