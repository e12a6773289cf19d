"""Pure calendar calculations, no UI dependencies."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

# Weeks start on Sunday, matching the S M T W T F S header row
FIRST_WEEKDAY = calendar.SUNDAY
DAY_LABELS = ["S", "M", "T", "W", "T", "F", "S"]


@dataclass(frozen=True)
class MonthView:
    """Everything the layout needs to know about one month."""

    year: int
    month: int
    days_in_month: int
    first_weekday_offset: int
    weeks_needed: int

    def contains(self, d: date) -> bool:
        return d.year == self.year and d.month == self.month


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in the given month (1-12)."""
    return calendar.monthrange(year, month)[1]


def first_weekday_offset(year: int, month: int) -> int:
    """Return the grid column (0 = Sunday) of the 1st of the month."""
    weekday = calendar.monthrange(year, month)[0]  # Monday == 0
    return (weekday - FIRST_WEEKDAY) % 7


def date_key(d: date) -> str:
    """Return the canonical YYYY-MM-DD key for a day."""
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def month_view(d: date) -> MonthView:
    """Return the MonthView for the month containing *d*."""
    days = days_in_month(d.year, d.month)
    offset = first_weekday_offset(d.year, d.month)
    weeks = -(-(offset + days) // 7)
    return MonthView(d.year, d.month, days, offset, weeks)


def month_title(year: int, month: int) -> str:
    return f"{calendar.month_name[month]} {year}"


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    if month == 1:
        return year - 1, 12
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def parse_date_key(key: str) -> date | None:
    """Return the date for a canonical YYYY-MM-DD key, else None."""
    try:
        d = date.fromisoformat(key)
    except (TypeError, ValueError):
        return None
    return d if date_key(d) == key else None
