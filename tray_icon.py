"""System-tray icon setup via pystray."""

from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu


def create_tray(
    icon_image: Image.Image,
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
    on_copy: Callable[[], None] | None = None,
    on_today: Callable[[], None] | None = None,
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Picker", lambda _icon, _item: on_show(), default=True),
    ]
    if on_copy is not None:
        items.append(MenuItem("Copy Selection", lambda _icon, _item: on_copy()))
    if on_today is not None:
        items.append(MenuItem("Today", lambda _icon, _item: on_today()))
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    return pystray.Icon("date-range-picker", icon_image, "Date Range Picker", Menu(*items))
