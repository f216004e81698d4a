"""Tray application: visibility state, icon, startup and entrypoint."""

from .controller import TrayController

__all__ = ["TrayController"]
