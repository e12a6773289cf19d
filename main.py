"""Entry point: widget render, tray + window, preview, or a one-off toggle."""

from __future__ import annotations

import argparse
import ctypes
import logging
import sys
import threading
from datetime import date

from calendar_logic import date_key
from habits import HABIT_KEYS, HabitRecord
from renderer import render_to_file
from settings import WIDGET_PATH, load_settings, toggle_habit

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = WIDGET_PATH


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


def run_widget(args: argparse.Namespace) -> int:
    print(render_to_file(args.output, load_settings(), args.screen_width))
    return 0


def run_toggle(args: argparse.Namespace) -> int:
    key = date_key(date.today())
    result = toggle_habit(key, args.habit)
    if not result:
        print(f"Could not save {args.habit} for {key}: {result.error}", file=sys.stderr)
        return 1
    state = "done" if result.value.is_done(args.habit) else "not done"
    print(f"{args.habit} {state} for {key}")
    render_to_file(args.output, load_settings(), args.screen_width)
    return 0


def run_preview(args: argparse.Namespace) -> int:
    from calendar_window import CalendarWindow

    cal_win = CalendarWindow(args.screen_width, output=args.output)
    cal_win.root.protocol("WM_DELETE_WINDOW", cal_win.root.destroy)
    cal_win.root.bind("<Escape>", lambda _e: cal_win.root.destroy())
    cal_win.show()
    cal_win.root.mainloop()
    return 0


def run_interactive(args: argparse.Namespace) -> int:
    """Glue pystray (daemon thread) with tkinter (main thread)."""
    from calendar_window import CalendarWindow
    from icon_gen import create_icon_image
    from tray_icon import create_tray

    trays = []

    def on_change(record: HabitRecord) -> None:
        if trays:
            trays[0].icon = create_icon_image(record, cal_win.theme)
            trays[0].update_menu()

    cal_win = CalendarWindow(args.screen_width, on_change=on_change,
                             output=args.output)

    # Callbacks marshalled onto the tkinter main thread
    def on_show() -> None:
        cal_win.root.after(0, cal_win.toggle)

    def on_toggle(habit_key: str) -> None:
        cal_win.root.after(0, cal_win.toggle_habit, habit_key)

    def on_exit() -> None:
        def _quit() -> None:
            tray.stop()
            cal_win.root.destroy()
        cal_win.root.after(0, _quit)

    def is_done(habit_key: str) -> bool:
        return cal_win.today_record().is_done(habit_key)

    tray = create_tray(create_icon_image(cal_win.today_record(), cal_win.theme),
                       is_done, on_toggle, on_show, on_exit)
    trays.append(tray)

    # Run pystray in a daemon thread so it doesn't block tkinter
    tray_thread = threading.Thread(target=tray.run, daemon=True)
    tray_thread.start()

    # tkinter main loop on the main thread
    cal_win.root.mainloop()
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="daily-wins",
        description="Month calendar with daily habit wins.",
    )
    ap.add_argument("--screen-width", type=int, default=None,
                    help="Device screen width used to pick the canvas size")
    ap.add_argument("--output", default=DEFAULT_OUTPUT,
                    help=f"PNG path for widget renders (default: {DEFAULT_OUTPUT})")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = ap.add_subparsers(dest="mode")
    sub.add_parser("widget", help="Render today's calendar to a PNG (default)")
    sub.add_parser("interactive", help="Tray menu plus calendar window")
    sub.add_parser("preview", help="Open the calendar window")
    toggle = sub.add_parser("toggle", help="Flip one of today's habits")
    toggle.add_argument("habit", choices=HABIT_KEYS)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if sys.platform == "win32":
        # DPI awareness so fonts are crisp on Hi-DPI monitors
        try:
            ctypes.windll.shcore.SetProcessDpiAwareness(1)
        except (AttributeError, OSError):
            logger.debug("DPI awareness not available")

    modes = {
        None: run_widget,
        "widget": run_widget,
        "interactive": run_interactive,
        "preview": run_preview,
        "toggle": run_toggle,
    }
    return modes[args.mode](args)


if __name__ == "__main__":
    sys.exit(main())
