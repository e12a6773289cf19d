"""Paint a LayoutPlan onto a Pillow image."""

from __future__ import annotations

import logging
import os
from datetime import date
from functools import lru_cache
from typing import Callable, Iterable

from PIL import Image, ImageDraw, ImageFont
from PIL.PngImagePlugin import PngInfo

from calendar_logic import DAY_LABELS, MonthView, date_key, month_title, month_view
from habits import HABITS, LIGHT, HabitCategory, HabitLog, Theme, theme_for
from layout import CanvasSpec, LayoutPlan, Point, Rect, canvas_for_screen, compute_layout
from location import current_city
from settings import load_habits

logger = logging.getLogger(__name__)

_REGULAR_FONTS = ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf", "segoeui.ttf")
_BOLD_FONTS = ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf", "segoeuib.ttf")

TITLE_SIZE = 24
CITY_SIZE = 16
WEEKDAY_SIZE = 14
DAY_SIZE = 18
WINS_SIZE = 18
LABEL_SIZE = 12

WINS_TITLE = "Today's Wins"
ELLIPSIS = "..."
TAP_URL = "daily-wins://toggle"


@lru_cache(maxsize=32)
def load_font(size: int, bold: bool = False) -> ImageFont.ImageFont:
    """Return the first available TrueType font, else Pillow's default."""
    for name in _BOLD_FONTS if bold else _REGULAR_FONTS:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size)


def fit_text(text: str, max_width: float, measure: Callable[[str], float]) -> str:
    """Trim *text* and append an ellipsis until it measures within *max_width*.

    Returns "" when not even the ellipsis fits.
    """
    if measure(text) <= max_width:
        return text
    for end in range(len(text) - 1, -1, -1):
        candidate = text[:end].rstrip() + ELLIPSIS
        if measure(candidate) <= max_width:
            return candidate
    return ""


class DrawSurface:
    """Stateful pen over a Pillow image: colours and font persist between calls."""

    def __init__(self, width: int, height: int, background: str) -> None:
        self._image = Image.new("RGBA", (width, height), background)
        self._draw = ImageDraw.Draw(self._image)
        self._fill = background
        self._text_color = background
        self._font = load_font(12)

    def set_fill_color(self, color: str) -> None:
        self._fill = color

    def set_text_color(self, color: str) -> None:
        self._text_color = color

    def set_font(self, size: int, bold: bool = False) -> None:
        self._font = load_font(size, bold)

    def text_width(self, text: str) -> float:
        return self._draw.textlength(text, font=self._font)

    def draw_text(self, text: str, point: Point, align: str = "left") -> None:
        x = point.x
        if align == "center":
            x -= self.text_width(text) / 2
        elif align == "right":
            x -= self.text_width(text)
        self._draw.text((x, point.y), text, fill=self._text_color, font=self._font)

    def draw_text_in_rect(self, text: str, rect: Rect, align: str = "left") -> None:
        """Draw *text* inside *rect*, shortened with an ellipsis if too wide."""
        text = fit_text(text, rect.width, self.text_width)
        if not text:
            return
        if align == "center":
            anchor = Point(rect.center_x, rect.y)
        elif align == "right":
            anchor = Point(rect.x + rect.width, rect.y)
        else:
            anchor = Point(rect.x, rect.y)
        self.draw_text(text, anchor, align)

    def fill_ellipse(self, rect: Rect) -> None:
        self._draw.ellipse(_box(rect), fill=self._fill)

    def stroke_ellipse(self, rect: Rect, width: int) -> None:
        self._draw.ellipse(_box(rect), outline=self._fill, width=width)

    def fill_rect(self, rect: Rect) -> None:
        self._draw.rectangle(_box(rect), fill=self._fill)

    def stroke_polyline(self, points: Iterable[Point], width: int) -> None:
        self._draw.line([tuple(p) for p in points], fill=self._fill,
                        width=width, joint="curve")

    def get_image(self) -> Image.Image:
        return self._image


def _box(rect: Rect) -> list[float]:
    # Pillow boxes are inclusive of the far edge
    return [rect.x, rect.y,
            rect.x + max(rect.width - 1, 0), rect.y + max(rect.height - 1, 0)]


def render_calendar(plan: LayoutPlan, month: MonthView, log: HabitLog,
                    city: str, surface: DrawSurface, today: date,
                    theme: Theme = LIGHT) -> None:
    """Draw the header, month grid and today's wins onto *surface*."""
    px = plan.canvas.px

    # Header
    surface.set_font(px(TITLE_SIZE), bold=True)
    surface.set_text_color(theme.text_primary)
    surface.draw_text(month_title(month.year, month.month), plan.header)

    surface.set_font(px(CITY_SIZE))
    surface.set_text_color(theme.text_secondary)
    surface.draw_text_in_rect(city, plan.city_box, align="right")

    # Weekday labels
    surface.set_font(px(WEEKDAY_SIZE))
    for x, label in zip(plan.column_x, DAY_LABELS):
        surface.draw_text(label, Point(x, plan.weekday_y), align="center")

    # Day grid
    surface.set_font(px(DAY_SIZE))
    for cell in plan.cells:
        if plan.highlight is not None and cell.day == today.day:
            surface.set_fill_color(theme.highlight)
            surface.fill_ellipse(plan.highlight)

        surface.set_text_color(theme.text_primary)
        surface.draw_text(str(cell.day), Point(cell.x, cell.y), align="center")

        record = log.get(date_key(date(month.year, month.month, cell.day)))
        if record is None or not record.any_done():
            continue
        active = record.active(tuple(i.habit for i in plan.indicators))
        for habit, box in zip(active, plan.dot_row(cell, len(active))):
            surface.set_fill_color(habit.color)
            surface.fill_ellipse(box)

    surface.set_fill_color(theme.divider)
    surface.fill_rect(plan.divider)

    # Today's wins
    surface.set_font(px(WINS_SIZE), bold=True)
    surface.set_text_color(theme.text_primary)
    surface.draw_text(WINS_TITLE, plan.wins_label)

    today_record = log.get(date_key(today))
    for indicator in plan.indicators:
        surface.set_fill_color(indicator.habit.color)
        if today_record is not None and today_record.is_done(indicator.habit.key):
            surface.fill_ellipse(indicator.circle)
            surface.set_fill_color(theme.check)
            surface.stroke_polyline(indicator.check, plan.check_width)
        else:
            surface.stroke_ellipse(indicator.circle, plan.indicator_stroke)

        surface.set_font(px(LABEL_SIZE))
        surface.set_text_color(theme.text_primary)
        surface.draw_text_in_rect(indicator.habit.label, indicator.label, align="center")


def render_widget(canvas: CanvasSpec, today: date, city: str, log: HabitLog,
                  theme: Theme = LIGHT, shown: date | None = None,
                  categories: tuple[HabitCategory, ...] = HABITS) -> Image.Image:
    """Render the month containing *shown* (default: today) to an image."""
    month = month_view(shown or today)
    plan = compute_layout(canvas, month, today, categories)
    surface = DrawSurface(canvas.width, canvas.height, theme.background)
    render_calendar(plan, month, log, city, surface, today, theme)
    return surface.get_image()


def render_to_file(output: str, settings: dict,
                   screen_width: int | None = None,
                   today: date | None = None) -> str:
    """Render today's month to a PNG carrying the tap URL; return its path."""
    today = today or date.today()
    canvas = canvas_for_screen(screen_width or settings["screen_width"])
    log = load_habits().value
    image = render_widget(canvas, today, current_city(settings), log,
                          theme_for(settings["dark_mode"]))

    info = PngInfo()
    info.add_text("url", TAP_URL)
    directory = os.path.dirname(output)
    if directory:
        os.makedirs(directory, exist_ok=True)
    image.save(output, pnginfo=info)
    logger.info("Rendered %dx%d widget to %s", canvas.width, canvas.height, output)
    return output
