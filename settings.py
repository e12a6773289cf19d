"""JSON-based persistence for habit records and app settings."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass, field
from typing import Any

from calendar_logic import parse_date_key
from habits import HabitLog, HabitRecord, log_to_json

logger = logging.getLogger(__name__)

DATA_DIR = os.environ.get(
    "DAILY_WINS_HOME", os.path.join(os.path.expanduser("~"), ".daily-wins"),
)
HABITS_PATH = os.path.join(DATA_DIR, "habit-tracker-data.json")
LOCATION_PATH = os.path.join(DATA_DIR, "habit-tracker-location.json")
SETTINGS_PATH = os.path.join(DATA_DIR, "settings.json")
WIDGET_PATH = os.path.join(DATA_DIR, "widget.png")

_DEFAULTS = {
    "screen_width": 390,
    "dark_mode": False,
    "city": None,
    "window_x": None,
    "window_y": None,
}


@dataclass
class StoreResult:
    """Outcome of a store operation; *value* is usable even when not ok."""

    ok: bool
    value: Any = None
    error: str | None = field(default=None)

    def __bool__(self) -> bool:
        return self.ok


def _write_json(path: str, data: Any, indent: int | None = 2) -> None:
    """Write *data* to a temp file beside *path*, then swap it in."""
    directory = os.path.dirname(path) or "."
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".tmp-", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, sort_keys=True)
        os.replace(tmp_path, path)
    except BaseException:
        os.unlink(tmp_path)
        raise


# ------------------------------------------------------------------
# Habit records
# ------------------------------------------------------------------
def load_habits(path: str = HABITS_PATH) -> StoreResult:
    """Load the habit log. The value is always a dict, empty on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return StoreResult(True, {})
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        logger.warning("Could not load habit data from %s: %s", path, exc)
        return StoreResult(False, {}, str(exc))

    if not isinstance(stored, dict):
        logger.warning("Habit data in %s is not a JSON object", path)
        return StoreResult(False, {}, "habit data is not a JSON object")

    log: HabitLog = {}
    for key, value in stored.items():
        if parse_date_key(key) is None:
            logger.warning("Skipping habit entry with malformed date key %r", key)
            continue
        if not isinstance(value, dict):
            logger.warning("Skipping malformed habit entry %r", key)
            continue
        log[key] = HabitRecord.from_json(value)
    return StoreResult(True, log)


def save_habits(log: HabitLog, path: str = HABITS_PATH) -> StoreResult:
    """Persist the habit log; failures are reported, not raised."""
    try:
        _write_json(path, log_to_json(log))
    except (OSError, TypeError) as exc:
        logger.error("Could not save habit data to %s: %s", path, exc)
        return StoreResult(False, log, str(exc))
    return StoreResult(True, log)


def upsert_habit(key: str, record: HabitRecord,
                 path: str = HABITS_PATH) -> StoreResult:
    """Insert or replace the record for *key*; value is the new record."""
    log = load_habits(path).value
    log[key] = record
    saved = save_habits(log, path)
    return StoreResult(saved.ok, record, saved.error)


def toggle_habit(key: str, habit_key: str,
                 path: str = HABITS_PATH) -> StoreResult:
    """Flip one habit flag for the day *key*; value is the new record."""
    log = load_habits(path).value
    record = log.get(key, HabitRecord()).toggled(habit_key)
    logger.info("Toggled %s on %s -> %s", habit_key, key, record.is_done(habit_key))
    log[key] = record
    saved = save_habits(log, path)
    return StoreResult(saved.ok, record, saved.error)


# ------------------------------------------------------------------
# App settings
# ------------------------------------------------------------------
def load_settings(path: str = SETTINGS_PATH) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return settings
    if not isinstance(stored, dict):
        return settings

    if "dark_mode" in stored and isinstance(stored["dark_mode"], bool):
        settings["dark_mode"] = stored["dark_mode"]
    for key in ("screen_width", "window_x", "window_y"):
        value = stored.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            settings[key] = value
    if isinstance(stored.get("city"), str) and stored["city"].strip():
        settings["city"] = stored["city"].strip()
    return settings


def save_settings(settings: dict, path: str = SETTINGS_PATH) -> StoreResult:
    """Persist settings to disk."""
    try:
        _write_json(path, settings)
    except (OSError, TypeError) as exc:
        logger.error("Could not save settings to %s: %s", path, exc)
        return StoreResult(False, settings, str(exc))
    return StoreResult(True, settings)
