"""Pure business-logic helpers for event aggregation."""

from __future__ import annotations

import datetime as dt
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from library_events.domain.interfaces import IEventAggregator
from library_events.domain.models import (
    DEFAULT_CATEGORIES,
    FUNDING_SOURCES,
    Event,
    GroupBy,
    GroupSummary,
    Library,
    Summary,
)

ALL_EVENTS_KEY = "all"
_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def month_label(value: dt.date) -> str:
    """Return the ``YYYY-Mon`` label for the month containing ``value``."""

    return value.strftime("%Y-") + _MONTH_ABBR[value.month - 1]


class EventAggregator(IEventAggregator):
    """Performs read-only calculations on event records."""

    def __init__(
        self,
        categories: Sequence[str] = DEFAULT_CATEGORIES,
        libraries: Optional[Sequence[str]] = None,
    ) -> None:
        self._categories = tuple(categories)
        self._libraries = tuple(libraries) if libraries is not None else None

    def summarize(self, events: Sequence[Event]) -> Summary:
        stats = self._reduce(events)
        return Summary(
            total_events=stats["count"],
            total_attendees=stats["adults"] + stats["children"],
            total_adults=stats["adults"],
            total_children=stats["children"],
            total_cost=stats["cost"],
            average_attendees=self._average(stats["adults"] + stats["children"], stats["count"]),
            average_cost=self._average(stats["cost"], stats["count"]),
        )

    def aggregate(
        self,
        events: Sequence[Event],
        group_by: GroupBy | str,
        *,
        reference: Optional[Iterable[str]] = None,
        include_empty_groups: bool = False,
    ) -> List[GroupSummary]:
        """Bucket ``events`` and reduce every bucket to a :class:`GroupSummary`.

        ``reference`` is the ordered list of known keys for ``library``,
        ``category`` and ``funding_source`` grouping; it defaults to the names
        given to the constructor. Events whose key is not in it are left out.
        Month groups ignore ``reference`` and ``include_empty_groups`` and come
        back in calendar order.
        """

        group_by = GroupBy(group_by)
        if group_by is GroupBy.NONE:
            return [self._group(ALL_EVENTS_KEY, events)]
        if group_by is GroupBy.MONTH:
            return self._group_by_month(events)

        key_func: Callable[[Event], str]
        if group_by is GroupBy.LIBRARY:
            reference = self._libraries if reference is None else reference
            if reference is None:
                raise ValueError("library grouping requires the known library names")
            key_func = lambda event: event.library  # noqa: E731
        elif group_by is GroupBy.CATEGORY:
            reference = self._categories if reference is None else reference
            key_func = lambda event: event.category  # noqa: E731
        else:
            reference = FUNDING_SOURCES if reference is None else reference
            key_func = lambda event: event.funding_source.value  # noqa: E731

        buckets: Dict[str, List[Event]] = {}
        for key in reference:
            buckets.setdefault(key, [])
        for event in events:
            key = key_func(event)
            if key in buckets:
                buckets[key].append(event)

        return [
            self._group(key, members)
            for key, members in buckets.items()
            if members or include_empty_groups
        ]

    @staticmethod
    def category_counts(events: Sequence[Event]) -> Dict[str, int]:
        """Event count per category, in order of first appearance."""

        counts: Dict[str, int] = {}
        for event in events:
            counts[event.category] = counts.get(event.category, 0) + 1
        return counts

    @staticmethod
    def count_upcoming(events: Sequence[Event], today: dt.date) -> int:
        return sum(1 for event in events if event.date >= today)

    @staticmethod
    def recent_events(events: Sequence[Event], limit: int) -> List[Event]:
        """Newest events first; equal dates keep their input order."""

        if limit < 0:
            raise ValueError("limit must be non-negative")
        return sorted(events, key=lambda event: event.date, reverse=True)[:limit]

    @staticmethod
    def attendance_rate(events: Sequence[Event], libraries: Sequence[Library]) -> float:
        """Percentage of available seats filled, using each event's own branch.

        Events at unknown branches or branches with zero capacity do not count.
        """

        capacities = {library.name: library.capacity for library in libraries}
        attendees = 0
        seats = 0
        for event in events:
            capacity = capacities.get(event.library, 0)
            if capacity <= 0:
                continue
            attendees += event.total_attendees
            seats += capacity
        if seats == 0:
            return 0.0
        return round(attendees * 100 / seats, 6)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _group_by_month(self, events: Sequence[Event]) -> List[GroupSummary]:
        buckets: Dict[dt.date, List[Event]] = {}
        for event in events:
            buckets.setdefault(event.date.replace(day=1), []).append(event)
        return [
            self._group(month_label(first_day), buckets[first_day], sort_key=first_day)
            for first_day in sorted(buckets)
        ]

    def _group(
        self, key: str, events: Sequence[Event], *, sort_key: Optional[dt.date] = None
    ) -> GroupSummary:
        stats = self._reduce(events)
        total = stats["adults"] + stats["children"]
        return GroupSummary(
            key=key,
            event_count=stats["count"],
            total_attendees=total,
            total_adults=stats["adults"],
            total_children=stats["children"],
            total_cost=stats["cost"],
            average_attendees=self._average(total, stats["count"]),
            average_cost=self._average(stats["cost"], stats["count"]),
            sort_key=sort_key,
        )

    @staticmethod
    def _reduce(events: Sequence[Event]) -> Dict[str, float]:
        adults = sum(event.attendees.adults for event in events)
        children = sum(event.attendees.children for event in events)
        cost = round(sum(event.cost for event in events), 6)
        return {"count": len(events), "adults": adults, "children": children, "cost": cost}

    @staticmethod
    def _average(total: float, count: int) -> float:
        if count == 0:
            return 0.0
        return round(total / count, 6)
