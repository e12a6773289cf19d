"""Calendar window (tkinter) hosting the rendered month image."""

from __future__ import annotations

import logging
import tkinter as tk
from datetime import date
from typing import Callable

from PIL import ImageTk

from calendar_logic import date_key, next_month, prev_month
from habits import HABITS, HabitRecord, menu_label, theme_for
from layout import canvas_for_screen
from location import current_city
from renderer import render_to_file, render_widget
from settings import (
    WIDGET_PATH,
    load_habits,
    load_settings,
    save_settings,
    toggle_habit,
)

logger = logging.getLogger(__name__)


class CalendarWindow:
    """Shows the month image; clicking it opens the habit toggle menu."""

    def __init__(self, screen_width: int | None = None,
                 on_change: Callable[[HabitRecord], None] | None = None,
                 output: str = WIDGET_PATH) -> None:
        self.root = tk.Tk()
        self.root.resizable(False, False)

        self._settings = load_settings()
        self._saved_x: int | None = self._settings["window_x"]
        self._saved_y: int | None = self._settings["window_y"]
        self._screen_width = screen_width
        self.output = output
        self.canvas = canvas_for_screen(screen_width or self._settings["screen_width"])
        self.theme = theme_for(self._settings["dark_mode"])
        self.city = current_city(self._settings)
        self._on_change = on_change

        self.root.configure(bg=self.theme.background)
        self.shown = date.today()
        self._photo: ImageTk.PhotoImage | None = None

        self._image_label = tk.Label(self.root, bd=0, cursor="hand2",
                                     bg=self.theme.background)
        self._image_label.pack(padx=6, pady=6)
        self._image_label.bind("<Button-1>", self._open_menu)

        self.root.bind("<Left>", lambda _e: self._navigate(-1))
        self.root.bind("<Right>", lambda _e: self._navigate(1))
        self.root.bind("<Home>", lambda _e: self._go_today())
        self.root.bind("<Escape>", lambda _e: self.hide())
        self.root.protocol("WM_DELETE_WINDOW", self.hide)

        self.refresh()
        self.root.withdraw()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def today_record(self) -> HabitRecord:
        log = load_habits().value
        return log.get(date_key(date.today()), HabitRecord())

    def refresh(self) -> None:
        today = date.today()
        log = load_habits().value
        image = render_widget(self.canvas, today, self.city, log,
                              self.theme, shown=self.shown)
        self._photo = ImageTk.PhotoImage(image)
        self._image_label.configure(image=self._photo)
        self.root.title(f"Daily Wins  {today:%a %d %b %Y}")
        if self._on_change is not None:
            self._on_change(log.get(date_key(today), HabitRecord()))

    # ------------------------------------------------------------------
    # Habit toggle menu
    # ------------------------------------------------------------------
    def _open_menu(self, event: tk.Event) -> None:
        self._post_menu(event.x_root, event.y_root)

    def _post_menu(self, x: int, y: int) -> None:
        # Re-posted after every toggle until "Done" or a click outside
        record = self.today_record()
        menu = tk.Menu(self.root, tearoff=0)
        for habit in HABITS:
            menu.add_command(
                label=menu_label(habit, record.is_done(habit.key)),
                command=lambda key=habit.key: self._toggle_from_menu(key, x, y),
            )
        menu.add_separator()
        menu.add_command(label="Done", command=menu.unpost)
        try:
            menu.tk_popup(x, y)
        finally:
            menu.grab_release()

    def _toggle_from_menu(self, habit_key: str, x: int, y: int) -> None:
        self.toggle_habit(habit_key)
        self.root.after(0, self._post_menu, x, y)

    def toggle_habit(self, habit_key: str) -> None:
        result = toggle_habit(date_key(date.today()), habit_key)
        if result:
            # Keep the widget image in step with the store
            render_to_file(self.output, self._settings, self._screen_width)
        else:
            logger.error("Toggle of %s was not saved: %s", habit_key, result.error)
        self.refresh()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def _navigate(self, direction: int) -> None:
        step = next_month if direction > 0 else prev_month
        year, month = step(self.shown.year, self.shown.month)
        self.shown = date(year, month, 1)
        self.refresh()

    def _go_today(self) -> None:
        self.shown = date.today()
        self.refresh()

    # ------------------------------------------------------------------
    # Show / Hide / Toggle
    # ------------------------------------------------------------------
    def toggle(self) -> None:
        if self.root.state() == "withdrawn" or not self.root.winfo_viewable():
            self.show()
        else:
            self.hide()

    def show(self) -> None:
        self.shown = date.today()
        self.refresh()
        self.root.deiconify()
        self.root.update_idletasks()
        self._position_window()
        self.root.lift()
        self.root.focus_force()

    def hide(self) -> None:
        self._persist_position()
        self.root.withdraw()

    def _persist_position(self) -> None:
        if self.root.state() == "withdrawn":
            return
        self._saved_x = self.root.winfo_x()
        self._saved_y = self.root.winfo_y()
        settings = load_settings()
        settings["window_x"] = self._saved_x
        settings["window_y"] = self._saved_y
        save_settings(settings)

    # ------------------------------------------------------------------
    # Position: last saved spot, else bottom-right of the screen
    # ------------------------------------------------------------------
    def _position_window(self) -> None:
        win_w = self.root.winfo_reqwidth()
        win_h = self.root.winfo_reqheight()
        if self._saved_x is not None and self._saved_y is not None:
            x, y = self._saved_x, self._saved_y
        else:
            x = self.root.winfo_screenwidth() - win_w - 12
            y = self.root.winfo_screenheight() - win_h - 60
        self.root.geometry(f"{win_w}x{win_h}+{x}+{y}")
