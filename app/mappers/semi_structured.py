"""Resolve loosely typed JSON columns into typed structures.

Columns such as ``hours`` or ``about`` are stored as JSON, but rows imported
from scrapes sometimes carry them as JSON-encoded text. Every value is
resolved once here into ``Raw`` (text that did not decode) or ``Parsed``
(decoded JSON) and then into the schema types. Nothing in this module raises
on malformed input.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from app.schemas.listing import About, Coordinates, DayHours, DetailedAddress, OpeningHours


@dataclass(frozen=True)
class Raw:
    text: str


@dataclass(frozen=True)
class Parsed:
    value: Any


SemiStructured = Raw | Parsed

WEEKDAYS = (
    ("montag", "monday"),
    ("dienstag", "tuesday"),
    ("mittwoch", "wednesday"),
    ("donnerstag", "thursday"),
    ("freitag", "friday"),
    ("samstag", "saturday"),
    ("sonntag", "sunday"),
)

_DAY_INDEX = {name: i for i, names in enumerate(WEEKDAYS) for name in names}


def resolve(value: Any) -> SemiStructured | None:
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return Parsed(json.loads(text))
        except ValueError:
            return Raw(text)
    return Parsed(value)


def _times(value: Any) -> list[str] | None:
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, list):
        return [str(t) for t in value if t is not None and str(t).strip()]
    if isinstance(value, dict) and "times" in value:
        return _times(value["times"])
    return None


def _day_entries(value: Any) -> dict[int, list[str]]:
    entries: dict[int, list[str]] = {}
    if isinstance(value, list):
        for item in value:
            if not isinstance(item, dict):
                continue
            day, times = item.get("day"), _times(item.get("times"))
            if not isinstance(day, str) or times is None:
                continue
            index = _DAY_INDEX.get(day.strip().lower())
            if index is not None:
                entries[index] = times
    elif isinstance(value, dict):
        for day, raw_times in value.items():
            index = _DAY_INDEX.get(str(day).strip().lower())
            times = _times(raw_times)
            if index is not None and times is not None:
                entries[index] = times
    return entries


def parse_hours(value: Any) -> OpeningHours | None:
    """Opening hours in Monday..Sunday order.

    Accepts ``[{"day": "Montag", "times": ["9-17"]}]`` as well as
    ``{"monday": "9-17"}``. Days without an entry come back with no times,
    which reads as closed.
    """
    resolved = resolve(value)
    if not isinstance(resolved, Parsed):
        return None
    entries = _day_entries(resolved.value)
    if not entries:
        return None
    return OpeningHours(
        days=[DayHours(day=german, times=entries.get(i, [])) for i, (german, _) in enumerate(WEEKDAYS)]
    )


def _features(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(f) for f in value if isinstance(f, (str, int, float)) and str(f).strip()]
    if isinstance(value, dict):
        return [str(k) for k, enabled in value.items() if enabled is True]
    return []


def parse_about(value: Any) -> About | None:
    resolved = resolve(value)
    if resolved is None:
        return None
    if isinstance(resolved, Raw):
        return About(description=resolved.text)

    data = resolved.value
    if isinstance(data, str):
        return About(description=data)
    if isinstance(data, list):
        # Scraped "about" sections: [{"id": ..., "name": ..., "options": [{"name": ..., "enabled": ...}]}]
        features: list[str] = []
        for section in data:
            if not isinstance(section, dict):
                continue
            for option in section.get("options") or []:
                if isinstance(option, dict) and option.get("enabled") and option.get("name"):
                    features.append(str(option["name"]))
        return About(features=features)
    if not isinstance(data, dict):
        return None

    description = data.get("description")
    features = _features(data.get("features"))
    if not features:
        for key, section in data.items():
            if key in ("description", "features"):
                continue
            features.extend(_features(section) if isinstance(section, dict) else [])
    return About(
        description=description if isinstance(description, str) else "",
        features=features,
    )


def parse_detailed_address(value: Any) -> DetailedAddress | None:
    resolved = resolve(value)
    if resolved is None:
        return None
    if isinstance(resolved, Raw):
        return DetailedAddress(raw=resolved.text)
    data = resolved.value
    if not isinstance(data, dict):
        return None

    def _text(key: str) -> str | None:
        item = data.get(key)
        return str(item) if item not in (None, "") else None

    return DetailedAddress(
        street=_text("street"),
        city=_text("city"),
        postal_code=_text("postal_code") or _text("zip"),
    )


def parse_review_list(value: Any) -> list[dict]:
    resolved = resolve(value)
    if not isinstance(resolved, Parsed) or not isinstance(resolved.value, list):
        return []
    return [r for r in resolved.value if isinstance(r, dict)]


def parse_coordinates(value: Any) -> Coordinates | None:
    resolved = resolve(value)
    if not isinstance(resolved, Parsed) or not isinstance(resolved.value, dict):
        return None
    data = resolved.value
    lat = data.get("latitude", data.get("lat"))
    lng = data.get("longitude", data.get("lng", data.get("lon")))
    try:
        return Coordinates(latitude=float(lat), longitude=float(lng))
    except (TypeError, ValueError):
        return None
