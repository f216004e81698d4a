"""Tray visibility state and menu/click reactions.

`TrayController` owns the single `visible` flag. Every mutation goes through
one critical section that holds the lock across the icon call, so two
concurrent toggles can never read the same value, and the flag is only
written after the icon accepted the change.
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Callable

from mediapedia.core.utils.exceptions import ResourceUnavailable, TrayLockError

from .protocols import HostWindow, TrayIconHandle

logger = logging.getLogger(__name__)

MENU_SHOW = "show"
MENU_QUIT = "quit"


def _default_exit(code: int) -> None:
    # Menu callbacks run on the tray backend thread, where sys.exit would only
    # end that thread.
    os._exit(code)


class TrayController:
    def __init__(
        self,
        *,
        icon: TrayIconHandle | None = None,
        window: HostWindow | None = None,
        exit_app: Callable[[int], None] | None = None,
        lock_timeout_s: float = 2.0,
    ):
        self._lock = threading.Lock()
        self._visible = False
        self._icon = icon
        self._window = window
        self._exit_app = exit_app or _default_exit
        self.lock_timeout_s = float(lock_timeout_s)

    # ---- wiring

    def attach_icon(self, icon: TrayIconHandle | None) -> None:
        self._icon = icon

    def attach_window(self, window: HostWindow | None) -> None:
        self._window = window

    # ---- state

    def _acquire(self) -> None:
        if not self._lock.acquire(timeout=self.lock_timeout_s):
            raise TrayLockError(f"tray state lock not acquired within {self.lock_timeout_s:g}s")

    @property
    def visible(self) -> bool:
        self._acquire()
        try:
            return self._visible
        finally:
            self._lock.release()

    def _apply_locked(self, target: bool) -> bool:
        icon = self._icon
        if icon is None:
            raise ResourceUnavailable("tray icon")
        try:
            icon.set_visible(target)
        except Exception as exc:
            raise ResourceUnavailable("tray icon", exc) from exc
        self._visible = target
        return target

    def set_visible(self, visible: bool) -> bool:
        self._acquire()
        try:
            return self._apply_locked(bool(visible))
        finally:
            self._lock.release()

    def toggle(self) -> bool:
        """Flip visibility and return the new value."""

        self._acquire()
        try:
            next_visible = self._apply_locked(not self._visible)
        finally:
            self._lock.release()
        logger.debug("Tray icon visible=%s", next_visible)
        return next_visible

    def hide_on_startup(self) -> None:
        """Force the hidden state once setup has completed.

        Some tray backends show the icon before our first hide lands; this is
        called again from the icon loop's setup hook to settle it.
        """

        self._acquire()
        try:
            self._visible = False
            if self._icon is None:
                return
            try:
                self._icon.set_visible(False)
            except Exception as exc:
                logger.warning("Could not hide tray icon on startup: %s", exc)
        finally:
            self._lock.release()

    # ---- menu / click reactions

    def on_menu_show(self) -> None:
        window = self._window
        if window is None:
            logger.debug("Show requested but no main window is attached")
            return
        # Host window calls are best-effort; a missing window must not crash the tray.
        try:
            window.show()
        except Exception as exc:
            logger.warning("Failed to show main window: %s", exc)
        try:
            window.set_focus()
        except Exception as exc:
            logger.warning("Failed to focus main window: %s", exc)

    def on_tray_left_click(self) -> None:
        self.on_menu_show()

    def on_menu_quit(self) -> None:
        logger.info("Quit requested from tray menu")
        self._exit_app(0)

    def menu_event(self, item_id: str) -> None:
        if item_id == MENU_SHOW:
            self.on_menu_show()
        elif item_id == MENU_QUIT:
            self.on_menu_quit()
        else:
            logger.debug("Ignoring unknown tray menu item %r", item_id)
