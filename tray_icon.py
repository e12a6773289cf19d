"""System-tray habit toggle menu via pystray."""

from typing import Callable

import pystray
from PIL import Image
from pystray import MenuItem, Menu

from habits import HABITS, HabitCategory, menu_label


def _habit_item(habit: HabitCategory,
                is_done: Callable[[str], bool],
                on_toggle: Callable[[str], None]) -> MenuItem:
    # pystray re-evaluates callable text/checked each time the menu opens
    return MenuItem(
        lambda _item: menu_label(habit, is_done(habit.key)),
        lambda _icon, _item: on_toggle(habit.key),
        checked=lambda _item: is_done(habit.key),
    )


def create_tray(
    icon_image: Image.Image,
    is_done: Callable[[str], bool],
    on_toggle: Callable[[str], None],
    on_show: Callable[[], None],
    on_exit: Callable[[], None],
) -> pystray.Icon:
    """Build and return a pystray Icon (not yet started)."""
    items: list[MenuItem | Menu] = [
        MenuItem("Show Calendar", lambda _icon, _item: on_show(), default=True),
        Menu.SEPARATOR,
    ]
    items.extend(_habit_item(habit, is_done, on_toggle) for habit in HABITS)
    items.append(Menu.SEPARATOR)
    items.append(MenuItem("Exit", lambda _icon, _item: on_exit()))
    return pystray.Icon("daily-wins", icon_image, "Today's Wins", Menu(*items))
