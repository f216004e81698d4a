"""MediaPedia configuration.

`config.json` merged over defaults, with XDG-style path resolution.
"""

from __future__ import annotations

from .config import Config
from .file_storage import load_config_settings, save_config_settings_atomic
from .paths import config_dir, config_file_path, data_dir


__all__ = [
    "Config",
    "config_dir",
    "config_file_path",
    "data_dir",
    "load_config_settings",
    "save_config_settings_atomic",
]
