"""Input validation and coercion helpers for event and library payloads."""

from __future__ import annotations

import datetime as dt
import math
import re
from typing import Any, Dict, Iterable, List, Mapping

from library_events.domain.exceptions import ValidationError
from library_events.domain.models import DEFAULT_CATEGORIES, FUNDING_SOURCES, FundingSource

_INT_PREFIX = re.compile(r"^\s*[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def coerce_count(value: Any) -> int:
    """Parse a head count leniently; anything unusable becomes 0."""

    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0) if math.isfinite(value) else 0
    match = _INT_PREFIX.match(str(value))
    if not match:
        return 0
    return max(int(match.group(0)), 0)


def coerce_amount(value: Any) -> float:
    """Parse a money amount leniently; anything unusable becomes 0."""

    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _FLOAT_PREFIX.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(0))
    if not math.isfinite(number):
        return 0.0
    return max(number, 0.0)


def parse_date(value: Any) -> dt.date:
    """Return a calendar date from a ``date``/``datetime`` or ISO string."""

    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and value.strip():
        return dt.date.fromisoformat(value.strip()[:10])
    raise ValueError(f"not a calendar date: {value!r}")


def _text(payload: Mapping[str, Any], name: str) -> str:
    value = payload.get(name)
    if value is None:
        return ""
    return str(value).strip()


def normalize_event_payload(
    payload: Mapping[str, Any], categories: Iterable[str] = DEFAULT_CATEGORIES
) -> Dict[str, Any]:
    """Validate an event payload and return constructor kwargs without ``id``.

    Head counts and cost never fail: invalid values coerce to 0. Missing
    title, library, category or date raise :class:`ValidationError`.
    """

    problems: List[str] = []
    title = _text(payload, "title")
    library = _text(payload, "library")
    category = _text(payload, "category")
    if not title:
        problems.append("title")
    if not library:
        problems.append("library")
    if not category or category not in set(categories):
        problems.append("category")

    event_date: dt.date | None = None
    try:
        event_date = parse_date(payload.get("date"))
    except ValueError:
        problems.append("date")

    funding_raw = payload.get("fundingSource", payload.get("funding_source"))
    if isinstance(funding_raw, FundingSource):
        funding_raw = funding_raw.value
    funding = funding_raw or FundingSource.LIBRARY_BUDGET.value
    if funding not in FUNDING_SOURCES:
        problems.append("fundingSource")

    if problems:
        raise ValidationError(
            "Event payload rejected", context={"fields": problems}
        )

    attendees = payload.get("attendees") or {}
    if not isinstance(attendees, Mapping):
        attendees = {
            "adults": getattr(attendees, "adults", 0),
            "children": getattr(attendees, "children", 0),
        }
    return {
        "title": title,
        "library": library,
        "category": category,
        "date": event_date,
        "attendees": {
            "adults": coerce_count(attendees.get("adults")),
            "children": coerce_count(attendees.get("children")),
        },
        "cost": coerce_amount(payload.get("cost")),
        "fundingSource": funding,
        "description": _text(payload, "description"),
    }


def normalize_library_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate a library payload and return constructor kwargs without ``id``."""

    name = _text(payload, "name")
    if not name:
        raise ValidationError("Library payload rejected", context={"fields": ["name"]})
    return {
        "name": name,
        "location": _text(payload, "location"),
        "capacity": coerce_count(payload.get("capacity")),
    }
