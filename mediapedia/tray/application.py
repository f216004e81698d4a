"""Tray application class.

Wires config, the credential vault, the tray controller and the command
surface together and runs the pystray loop. Migrations are not run here:
the entrypoint finishes them before this class is constructed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from mediapedia.commands import CommandSurface
from mediapedia.core.config import Config
from mediapedia.core.credentials import CredentialVault

from . import runtime
from .controller import TrayController
from .icon import PystrayTrayIcon
from .protocols import HostWindow

logger = logging.getLogger(__name__)


class MediaPediaApp:
    """Backend core of the MediaPedia desktop app."""

    def __init__(self, config: Config | None = None, *, window: HostWindow | None = None, keyring_backend: Any = None):
        self.config = config if config is not None else Config()
        self.exit_code = 0
        self.tray_icon: PystrayTrayIcon | None = None

        self.vault = CredentialVault(
            self.config.service_name,
            backend=keyring_backend,
            timeout_s=self.config.backend_timeout_s,
        )
        self.tray = TrayController(
            window=window,
            exit_app=self._exit,
            lock_timeout_s=self.config.tray_lock_timeout,
        )
        self.commands = CommandSurface(self.vault, self.tray)

    def _exit(self, code: int) -> None:
        self.exit_code = code
        if self.tray_icon is None:
            sys.exit(code)
        # Stopping the icon returns control from run(); the entrypoint exits.
        self.tray_icon.stop()

    def _on_icon_ready(self, _icon: Any) -> None:
        # Runs on pystray's setup thread once the icon loop is live.
        self.tray.hide_on_startup()

    def create_tray_icon(self) -> PystrayTrayIcon:
        pystray = runtime.get_pystray()
        self.tray_icon = PystrayTrayIcon(pystray=pystray, on_menu=self.tray.menu_event, title=self.config.tray_title)
        self.tray.attach_icon(self.tray_icon)
        self.tray.hide_on_startup()
        return self.tray_icon

    def run(self) -> int:
        icon = self.tray_icon or self.create_tray_icon()

        logger.info("MediaPedia backend started (keychain service=%s)", self.config.service_name)
        icon.run(setup=self._on_icon_ready)
        return self.exit_code
