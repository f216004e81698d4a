from __future__ import annotations

import importlib
import logging
import os
import sys

logger = logging.getLogger(__name__)

_pystray_mod = None


def _display_available() -> bool:
    if sys.platform in ("win32", "darwin"):
        return True
    return bool(os.environ.get("DISPLAY") or os.environ.get("WAYLAND_DISPLAY"))


def get_pystray():
    """Import pystray only when the tray icon is actually created.

    On Linux, importing pystray picks a backend and connects to the display
    immediately, which breaks headless runs (CI, `mediapedia migrate`) that
    still import the tray modules.
    """

    global _pystray_mod

    if _pystray_mod is not None:
        return _pystray_mod

    if not _display_available():
        raise RuntimeError(
            "The MediaPedia tray needs a desktop session (X11/Wayland); no display was found."
        )

    backend = os.environ.get("PYSTRAY_BACKEND")
    if backend:
        logger.info("pystray backend: %s (explicit)", backend)

    try:
        _pystray_mod = importlib.import_module("pystray")
    except Exception as exc:  # pragma: no cover (depends on desktop env)
        # A failed import can leave a half-initialised module behind.
        sys.modules.pop("pystray", None)
        raise RuntimeError(f"pystray could not be initialized: {exc}") from exc

    return _pystray_mod
