"""Host-facing protocols for the tray controller.

The controller never imports pystray or a window toolkit; it only needs these
two small surfaces, which keeps it testable with plain fakes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TrayIconHandle(Protocol):
    """The tray icon as seen by the controller."""

    def set_visible(self, visible: bool) -> None: ...


@runtime_checkable
class HostWindow(Protocol):
    """The application's main window, owned by the host UI."""

    def show(self) -> None: ...

    def set_focus(self) -> None: ...
