"""Filter evaluation shared by every derived view."""

from __future__ import annotations

from typing import Iterable, List, Optional

from library_events.domain.models import Event, FilterSpec


def matches(event: Event, spec: Optional[FilterSpec] = None) -> bool:
    """Return True when ``event`` satisfies every predicate present in ``spec``."""

    if spec is None:
        return True
    if spec.text:
        needle = spec.text.lower()
        if needle not in event.title.lower() and needle not in event.description.lower():
            return False
    if spec.libraries and event.library not in spec.libraries:
        return False
    if spec.categories and event.category not in spec.categories:
        return False
    if spec.date_from is not None and event.date < spec.date_from:
        return False
    if spec.date_to is not None and event.date > spec.date_to:
        return False
    return True


def filter_events(events: Iterable[Event], spec: Optional[FilterSpec] = None) -> List[Event]:
    """Return the events matching ``spec`` in their original order."""

    return [event for event in events if matches(event, spec)]
