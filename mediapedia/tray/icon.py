"""Tray icon image and the pystray-backed icon handle."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Callable

from PIL import Image, ImageDraw

from .controller import MENU_QUIT, MENU_SHOW

logger = logging.getLogger(__name__)

TRAY_ID = "main"

_ICON_SIZE = (64, 64)
_FRAME_COLOR = (230, 57, 70, 255)
_HOLE_COLOR = (0, 0, 0, 0)


@lru_cache(maxsize=1)
def create_icon_image() -> Image.Image:
    """Draw a 64x64 film-frame glyph (transparent background)."""

    img = Image.new("RGBA", _ICON_SIZE, color=(0, 0, 0, 0))
    draw = ImageDraw.Draw(img)

    draw.rounded_rectangle([6, 10, 57, 53], radius=6, fill=_FRAME_COLOR)
    # Sprocket holes along the top and bottom edges.
    for col in range(5):
        x = 11 + col * 9
        draw.rectangle([x, 13, x + 4, 17], fill=_HOLE_COLOR)
        draw.rectangle([x, 46, x + 4, 50], fill=_HOLE_COLOR)
    # Picture window.
    draw.rectangle([12, 21, 51, 42], fill=(255, 255, 255, 230))
    draw.polygon([(27, 25), (27, 38), (38, 31)], fill=_FRAME_COLOR)

    return img


class PystrayTrayIcon:
    """`TrayIconHandle` backed by a `pystray.Icon`.

    The "Show" item is the default item, so a left click on backends that
    support it (Windows, Xorg) behaves like choosing "Show" from the menu.
    """

    def __init__(
        self,
        *,
        pystray: Any,
        on_menu: Callable[[str], None],
        title: str = "MediaPedia",
    ):
        self._pystray = pystray
        item = pystray.MenuItem

        def _show(_icon, _item):
            on_menu(MENU_SHOW)

        def _quit(_icon, _item):
            on_menu(MENU_QUIT)

        menu = pystray.Menu(
            item(f"Show {title}", _show, default=True),
            item("Quit", _quit),
        )
        self.icon = pystray.Icon(TRAY_ID, create_icon_image(), title, menu=menu)

    def set_visible(self, visible: bool) -> None:
        self.icon.visible = bool(visible)

    def run(self, setup: Callable[[Any], None] | None = None) -> None:
        # With a setup hook pystray leaves the icon hidden until told otherwise.
        self.icon.run(setup=setup)

    def stop(self) -> None:
        self.icon.stop()
