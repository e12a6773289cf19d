"""Canvas geometry for the month view (no drawing calls).

Every coordinate the renderer paints comes from :func:`compute_layout`.
Sizes are designed against a 345 px tall canvas and scaled by
``height / REFERENCE_HEIGHT``, so each font size, radius and gap is
``round(base * scale)``.

Vertical stack, top to bottom::

    padding
    header         month title (left) + city (right)       36
    weekday labels S M T W T F S                           24
    day grid       weeks_needed rows of row_height
    bottom         divider, "Today's Wins", indicators    105
    padding

The day grid gets whatever height is left, split evenly over the weeks of
the month, so a six-week month gets shorter rows instead of overflowing.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import NamedTuple

from calendar_logic import MonthView
from habits import HABITS, HabitCategory

REFERENCE_HEIGHT = 345
PADDING = 12

# (min screen width, canvas width, canvas height), widest first
BREAKPOINTS: tuple[tuple[int, int, int], ...] = (
    (428, 364, 382),  # Pro Max / Plus
    (390, 338, 354),  # Pro / standard
    (375, 329, 345),  # mini / SE
    (0, 292, 311),    # anything smaller
)

HEADER_SPACE = 36
DAY_LABEL_SPACE = 24
BOTTOM_SECTION_SPACE = 105

CITY_BOX_WIDTH = 140
CITY_BOX_HEIGHT = 20


class Point(NamedTuple):
    x: float
    y: float


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class CanvasSpec:
    width: int
    height: int
    padding: int = PADDING

    @property
    def scale(self) -> float:
        return self.height / REFERENCE_HEIGHT

    @property
    def inner_width(self) -> int:
        return self.width - 2 * self.padding

    def px(self, base: float) -> int:
        """Scale a design-time size to this canvas."""
        return round(base * self.scale)


def canvas_for_screen(screen_width: float) -> CanvasSpec:
    """Pick the canvas size for a device screen width."""
    for min_width, width, height in BREAKPOINTS:
        if screen_width >= min_width:
            return CanvasSpec(width, height)
    _min, width, height = BREAKPOINTS[-1]
    return CanvasSpec(width, height)


@dataclass(frozen=True)
class DayCell:
    day: int
    row: int
    column: int
    x: float  # column centre
    y: float  # top of the day number


@dataclass(frozen=True)
class Indicator:
    habit: HabitCategory
    circle: Rect
    label: Rect
    check: tuple[Point, ...]


@dataclass(frozen=True)
class LayoutPlan:
    canvas: CanvasSpec
    header: Point
    city_box: Rect
    calendar_top: int
    weekday_y: int
    column_x: tuple[float, ...]
    cell_width: float
    grid_top: int
    grid_budget: int
    row_height: int
    weeks: int
    cells: tuple[DayCell, ...]
    highlight: Rect | None
    dot_size: int
    dot_spacing: int
    dot_offset: int
    divider: Rect
    wins_label: Point
    indicator_stroke: int
    check_width: int
    indicators: tuple[Indicator, ...]

    def cell_for(self, day: int) -> DayCell:
        return self.cells[day - 1]

    def dot_row(self, cell: DayCell, count: int) -> list[Rect]:
        """Boxes for *count* dots centred under the day number."""
        total = count * self.dot_size + (count - 1) * self.dot_spacing
        x = cell.x - total / 2
        y = cell.y + self.dot_offset
        boxes = []
        for _ in range(count):
            boxes.append(Rect(x, y, self.dot_size, self.dot_size))
            x += self.dot_size + self.dot_spacing
        return boxes


def row_centered_left(total_width: float, count: int, item: float, gap: float) -> float:
    """Left edge of a row of *count* items centred in *total_width*."""
    row = count * item + (count - 1) * gap
    return (total_width - row) / 2


def _day_cells(month: MonthView, column_x: tuple[float, ...],
               grid_top: int, row_height: int) -> tuple[DayCell, ...]:
    cells = []
    for day in range(1, month.days_in_month + 1):
        row, column = divmod(month.first_weekday_offset + day - 1, 7)
        cells.append(DayCell(day, row, column, column_x[column],
                             grid_top + row * row_height))
    return tuple(cells)


def _check_points(circle: Rect) -> tuple[Point, ...]:
    s = circle.width
    return (
        Point(circle.x + 0.28 * s, circle.y + 0.52 * s),
        Point(circle.x + 0.44 * s, circle.y + 0.68 * s),
        Point(circle.x + 0.73 * s, circle.y + 0.35 * s),
    )


def compute_layout(canvas: CanvasSpec, month: MonthView,
                   today: date | None = None,
                   categories: tuple[HabitCategory, ...] = HABITS) -> LayoutPlan:
    """Compute every position needed to paint *month* on *canvas*."""
    px = canvas.px
    padding = canvas.padding

    header = Point(padding, padding + 4)
    city_box = Rect(canvas.width - CITY_BOX_WIDTH - padding, padding + 8,
                    CITY_BOX_WIDTH, CITY_BOX_HEIGHT)

    calendar_top = padding + px(HEADER_SPACE)
    cell_width = canvas.inner_width / 7
    column_x = tuple(padding + i * cell_width + cell_width / 2 for i in range(7))

    grid_top = calendar_top + px(DAY_LABEL_SPACE)
    grid_budget = (canvas.height - padding - px(HEADER_SPACE) - px(DAY_LABEL_SPACE)
                   - px(BOTTOM_SECTION_SPACE) - padding)
    row_height = grid_budget // month.weeks_needed
    cells = _day_cells(month, column_x, grid_top, row_height)

    highlight = None
    if today is not None and month.contains(today):
        cell = cells[today.day - 1]
        size = px(28)
        highlight = Rect(cell.x - size / 2, cell.y - px(4), size, size)

    calendar_end = grid_top + month.weeks_needed * row_height
    divider = Rect(padding, calendar_end + px(8), canvas.inner_width, 1)
    wins_label = Point(padding, divider.y + px(12))

    indicator_y = wins_label.y + px(28)
    circle_size = px(32)
    spacing = px(70)
    x = row_centered_left(canvas.width, len(categories), circle_size, spacing)
    indicators = []
    for habit in categories:
        circle = Rect(x, indicator_y, circle_size, circle_size)
        label_width = circle_size + spacing
        label = Rect(circle.center_x - label_width / 2, circle.bottom + px(6),
                     label_width, px(16))
        indicators.append(Indicator(habit, circle, label, _check_points(circle)))
        x += circle_size + spacing

    return LayoutPlan(
        canvas=canvas,
        header=header,
        city_box=city_box,
        calendar_top=calendar_top,
        weekday_y=calendar_top,
        column_x=column_x,
        cell_width=cell_width,
        grid_top=grid_top,
        grid_budget=grid_budget,
        row_height=row_height,
        weeks=month.weeks_needed,
        cells=cells,
        highlight=highlight,
        dot_size=px(5),
        dot_spacing=px(6),
        dot_offset=px(26),
        divider=divider,
        wins_label=wins_label,
        indicator_stroke=px(2),
        check_width=max(2, px(3)),
        indicators=tuple(indicators),
    )
