"""Habit categories, per-day habit records and colour themes."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class HabitCategory:
    key: str
    label: str
    color: str


# Order matters: it is the left-to-right draw order of dots and indicators
HABITS: tuple[HabitCategory, ...] = (
    HabitCategory("physical", "Physical", "#34C759"),
    HabitCategory("intellectual", "Intellectual", "#FFCC00"),
    HabitCategory("spiritual", "Spiritual", "#AF52DE"),
)

HABIT_KEYS: tuple[str, ...] = tuple(h.key for h in HABITS)

_BY_KEY = {h.key: h for h in HABITS}


DONE_GLYPH = "✓"
OPEN_GLYPH = "○"


def habit_by_key(key: str) -> HabitCategory:
    """Return the category for *key*; raises KeyError for unknown keys."""
    return _BY_KEY[key]


def menu_label(habit: HabitCategory, done: bool) -> str:
    """Menu text for a habit, prefixed with its completion glyph."""
    return f"{DONE_GLYPH if done else OPEN_GLYPH} {habit.label}"


@dataclass(frozen=True)
class HabitRecord:
    """Completion flags for one day. A missing record means all False."""

    physical: bool = False
    intellectual: bool = False
    spiritual: bool = False

    def is_done(self, key: str) -> bool:
        habit_by_key(key)
        return getattr(self, key)

    def toggled(self, key: str) -> HabitRecord:
        """Return a copy with the flag for *key* flipped."""
        return replace(self, **{key: not self.is_done(key)})

    def active(
        self, categories: tuple[HabitCategory, ...] = HABITS,
    ) -> list[HabitCategory]:
        """Return the completed categories, in category order."""
        return [c for c in categories if getattr(self, c.key, False)]

    def any_done(self) -> bool:
        return self.physical or self.intellectual or self.spiritual

    def to_json(self) -> dict[str, bool]:
        return {key: getattr(self, key) for key in HABIT_KEYS}

    @classmethod
    def from_json(cls, data: dict) -> HabitRecord:
        """Build a record from a JSON object; non-bool flags count as False."""
        return cls(**{key: data.get(key) is True for key in HABIT_KEYS})


# DateKey -> HabitRecord
HabitLog = dict[str, HabitRecord]


def log_to_json(log: HabitLog) -> dict[str, dict[str, bool]]:
    return {key: log[key].to_json() for key in sorted(log)}


@dataclass(frozen=True)
class Theme:
    background: str
    text_primary: str
    text_secondary: str
    highlight: str
    divider: str
    check: str


LIGHT = Theme(
    background="#FFFFFF",
    text_primary="#1A1A1A",
    text_secondary="#8E8E93",
    highlight="#E5E5EA",
    divider="#C6C6C8",
    check="#FFFFFF",
)

DARK = Theme(
    background="#1C1C1E",
    text_primary="#F2F2F7",
    text_secondary="#8E8E93",
    highlight="#3A3A3C",
    divider="#48484A",
    check="#FFFFFF",
)


def theme_for(dark_mode: bool) -> Theme:
    return DARK if dark_mode else LIGHT
