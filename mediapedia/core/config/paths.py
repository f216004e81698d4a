"""Config and data path helpers.

Kept separate from the Config object so tests and the storage layer can
resolve locations without loading config.json.
"""

from __future__ import annotations

import os
from pathlib import Path


def config_dir() -> Path:
    """Return the directory used for MediaPedia configuration.

    Priority:
    - MEDIAPEDIA_CONFIG_DIR
    - XDG_CONFIG_HOME/mediapedia
    - ~/.config/mediapedia
    """

    p = os.environ.get("MEDIAPEDIA_CONFIG_DIR")
    if p:
        return Path(p)

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "mediapedia"

    return Path.home() / ".config" / "mediapedia"


def config_file_path() -> Path:
    """Return the config.json path.

    Priority:
    - MEDIAPEDIA_CONFIG_PATH (explicit file override)
    - config_dir()/config.json
    """

    p = os.environ.get("MEDIAPEDIA_CONFIG_PATH")
    if p:
        return Path(p)
    return config_dir() / "config.json"


def data_dir() -> Path:
    """Return the directory holding the local catalog database.

    Priority:
    - MEDIAPEDIA_DATA_DIR
    - XDG_DATA_HOME/mediapedia
    - ~/.local/share/mediapedia
    """

    p = os.environ.get("MEDIAPEDIA_DATA_DIR")
    if p:
        return Path(p)

    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "mediapedia"

    return Path.home() / ".local" / "share" / "mediapedia"
