"""City label for the calendar header, cached for an hour."""

from __future__ import annotations

import json
import logging
import os
import time

import requests

from settings import LOCATION_PATH

logger = logging.getLogger(__name__)

LOCATION_CACHE_DURATION_MS = 3_600_000
PLACEHOLDER_CITY = "Location"
_LOOKUP_URL = "http://ip-api.com/json/"


def _now_ms() -> int:
    return int(time.time() * 1000)


def get_cached_location(path: str = LOCATION_PATH,
                        now_ms: int | None = None) -> str | None:
    """Return the cached city if it is younger than one hour."""
    if now_ms is None:
        now_ms = _now_ms()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        city = data["city"]
        age = now_ms - int(data["timestamp"])
    except FileNotFoundError:
        return None
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.warning("Ignoring bad location cache %s: %s", path, exc)
        return None
    if not isinstance(city, str) or not city or not 0 <= age < LOCATION_CACHE_DURATION_MS:
        return None
    return city


def cache_location(city: str, path: str = LOCATION_PATH,
                   now_ms: int | None = None) -> None:
    if now_ms is None:
        now_ms = _now_ms()
    try:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"city": city, "timestamp": now_ms}, f)
    except OSError as exc:
        logger.warning("Could not cache location to %s: %s", path, exc)


def lookup_city(timeout: float = 5) -> str | None:
    """Resolve the current city from the public IP, or None."""
    try:
        r = requests.get(
            _LOOKUP_URL, params={"fields": "status,city,regionName"}, timeout=timeout,
        )
        r.raise_for_status()
        data = r.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Location lookup failed: %s", exc)
        return None
    if not isinstance(data, dict) or data.get("status") != "success":
        logger.warning("Location lookup returned no result: %r", data)
        return None
    return data.get("city") or data.get("regionName") or None


def current_city(settings: dict | None = None, path: str = LOCATION_PATH,
                 now_ms: int | None = None) -> str:
    """Return a label for the header; never raises."""
    if settings and settings.get("city"):
        return settings["city"]

    cached = get_cached_location(path, now_ms)
    if cached:
        return cached

    city = lookup_city()
    if city:
        cache_location(city, path, now_ms)
        return city
    return PLACEHOLDER_CITY
