"""
System tray indicator.

The watcher only needs three operations from the tray: create it with a
title, swap its icon by symbolic name, and add a clickable menu entry.
``PystrayIndicator`` implements them with pystray; the icons are drawn
with Pillow so no asset files are needed.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Protocol, Tuple

from PIL import Image, ImageDraw

from packages.core.watcher.errors import TrayError
from packages.core.watcher.types import IconIdentity

log = logging.getLogger(__name__)

ICON_SIZE = 64

ICON_COLORS: Dict[str, Tuple[int, int, int, int]] = {
    "ok": (46, 160, 67, 255),
    "cancel": (207, 34, 46, 255),
}


class TrayIndicator(Protocol):
    def set_icon(self, identity: IconIdentity) -> None:
        ...

    def add_menu_item(self, label: str, on_click: Callable[[], None]) -> None:
        ...

    def show(self) -> None:
        ...

    def close(self) -> None:
        ...


def render_icon(identity: str, size: int = ICON_SIZE) -> Image.Image:
    """Draw the named status icon: a green tick for "ok", a red cross for "cancel"."""
    if identity not in ICON_COLORS:
        raise TrayError("set_icon", f"unknown icon identity {identity!r}")

    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    pad = size // 16
    draw.ellipse((pad, pad, size - pad, size - pad), fill=ICON_COLORS[identity])

    width = max(2, size // 10)
    white = (255, 255, 255, 255)
    if identity == "ok":
        points = [
            (size * 0.28, size * 0.52),
            (size * 0.44, size * 0.68),
            (size * 0.73, size * 0.36),
        ]
        draw.line(points, fill=white, width=width, joint="curve")
    else:
        lo, hi = size * 0.32, size * 0.68
        draw.line([(lo, lo), (hi, hi)], fill=white, width=width)
        draw.line([(lo, hi), (hi, lo)], fill=white, width=width)
    return image


class PystrayIndicator:
    """Tray icon backed by a ``pystray.Icon`` running detached from the main thread."""

    def __init__(self, title: str, icon: IconIdentity) -> None:
        try:
            import pystray
        except Exception as e:
            raise TrayError("create", f"system tray backend unavailable: {e}") from e

        self._pystray = pystray
        self._items: List[Any] = []
        self._images: Dict[str, Image.Image] = {}
        self._visible = False
        self.title = title
        try:
            self._icon = pystray.Icon("process-watcher", self._image(icon), title)
        except Exception as e:
            raise TrayError("create", str(e)) from e

    def _image(self, identity: str) -> Image.Image:
        if identity not in self._images:
            self._images[identity] = render_icon(identity)
        return self._images[identity]

    def set_icon(self, identity: IconIdentity) -> None:
        image = self._image(identity)
        try:
            self._icon.icon = image
        except Exception as e:
            raise TrayError("set_icon", str(e)) from e

    def add_menu_item(self, label: str, on_click: Callable[[], None]) -> None:
        def action(icon: Any, item: Any) -> None:
            on_click()

        try:
            self._items.append(self._pystray.MenuItem(label, action))
            self._icon.menu = self._pystray.Menu(*self._items)
            if self._visible:
                self._icon.update_menu()
        except Exception as e:
            raise TrayError("add_menu_item", str(e)) from e

    def show(self) -> None:
        try:
            self._icon.run_detached()
        except Exception as e:
            raise TrayError("show", str(e)) from e
        self._visible = True

    def close(self) -> None:
        if not self._visible:
            return
        self._visible = False
        try:
            self._icon.stop()
        except Exception:
            log.exception("Failed to stop tray icon")

