"""MediaPedia Config implementation."""

from __future__ import annotations

import logging
from pathlib import Path

from .defaults import DEFAULTS as _DEFAULTS
from .file_storage import load_config_settings, save_config_settings_atomic
from .paths import config_dir, config_file_path, data_dir
from ._props import str_prop, timeout_prop

logger = logging.getLogger(__name__)


class Config:
    """Configuration manager for MediaPedia."""

    DEFAULTS = _DEFAULTS

    def __init__(self):
        # Resolved at runtime so test harnesses can set env vars in conftest.
        self.CONFIG_DIR = config_dir()
        self.CONFIG_FILE = config_file_path()
        loaded = self._load()
        self._settings = loaded if loaded is not None else dict(self.DEFAULTS)

    def _load(self, *, retries: int = 3, retry_delay: float = 0.02):
        """Load settings from file.

        Returns None if loading fails after retries; callers fall back to
        defaults rather than refusing to start.
        """

        return load_config_settings(
            config_file=self.CONFIG_FILE,
            defaults=self.DEFAULTS,
            retries=retries,
            retry_delay=retry_delay,
            logger=logger,
        )

    def reload(self) -> None:
        loaded = self._load()
        # If the file was transiently unreadable, keep the previous in-memory settings.
        if loaded is not None:
            self._settings = loaded

    def _save(self) -> None:
        save_config_settings_atomic(
            config_dir=self.CONFIG_DIR,
            config_file=self.CONFIG_FILE,
            settings=self._settings,
            logger=logger,
        )

    service_name = str_prop("service_name", default=_DEFAULTS["service_name"])
    database_url = str_prop("database_url", default=_DEFAULTS["database_url"])
    tray_title = str_prop("tray_title", default=_DEFAULTS["tray_title"])
    backend_timeout_s = timeout_prop("backend_timeout_s", default=_DEFAULTS["backend_timeout_s"])
    tray_lock_timeout_s = timeout_prop("tray_lock_timeout_s", default=_DEFAULTS["tray_lock_timeout_s"])

    @property
    def data_dir(self) -> Path:
        return data_dir()

    @property
    def tray_lock_timeout(self) -> float:
        # A tray toggle must never block forever; None falls back to the default.
        v = self.tray_lock_timeout_s
        return float(_DEFAULTS["tray_lock_timeout_s"]) if v is None else v
