"""The fixed command surface the host UI invokes.

Each command is a synchronous call. Failures reach the host as
`CommandError`, whose message is what the UI shows; `get_keys` never fails.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .core.credentials import CredentialVault
from .core.utils.exceptions import MediaPediaError
from .tray.controller import TrayController

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """A command failed; `str(exc)` is the message for the user."""


class CommandSurface:
    NAMES = ("get_keys", "set_keys", "reset_keys", "toggle_tray")

    def __init__(self, vault: CredentialVault, tray: TrayController):
        self.vault = vault
        self.tray = tray

    def get_keys(self) -> dict[str, str | None]:
        return self.vault.get_keys().to_payload()

    def set_keys(self, omdbKey: str, tmdbKey: str) -> None:  # noqa: N803 (host field names)
        try:
            self.vault.set_keys(omdbKey, tmdbKey)
        except (MediaPediaError, TypeError) as exc:
            logger.warning("set_keys failed: %s", exc)
            raise CommandError(str(exc)) from exc

    def reset_keys(self) -> None:
        try:
            self.vault.reset_keys()
        except MediaPediaError as exc:
            logger.warning("reset_keys failed: %s", exc)
            raise CommandError(str(exc)) from exc

    def toggle_tray(self) -> bool:
        try:
            return self.tray.toggle()
        except MediaPediaError as exc:
            logger.warning("toggle_tray failed: %s", exc)
            raise CommandError(str(exc)) from exc

    def invoke(self, name: str, **kwargs: Any) -> Any:
        """Dispatch a command by name, as the host's invoke bridge does."""

        if name not in self.NAMES:
            raise CommandError(f"unknown command: {name}")
        handler: Callable[..., Any] = getattr(self, name)
        try:
            return handler(**kwargs)
        except TypeError as exc:
            # Bad or missing arguments from the host.
            raise CommandError(f"invalid arguments for {name}: {exc}") from exc
