"""Default configuration values."""

from __future__ import annotations

DEFAULTS: dict = {
    # Keychain namespace; both API keys live under this service name.
    "service_name": "MediaPedia",
    # Relative sqlite paths resolve against data_dir().
    "database_url": "sqlite:mediapedia.db",
    # Seconds before a keychain call is abandoned. None waits forever.
    "backend_timeout_s": 5.0,
    # Seconds a tray toggle waits for the visibility lock.
    "tray_lock_timeout_s": 2.0,
    "tray_title": "MediaPedia",
}
