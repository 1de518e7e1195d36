"""Report facade that turns store contents into dashboard and report views."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from library_events.analytics.aggregator import EventAggregator
from library_events.analytics.filters import filter_events
from library_events.analytics.ranking import top_n
from library_events.core.store import LibraryEventStore
from library_events.domain.interfaces import IEventAggregator, IReportService
from library_events.domain.models import (
    Event,
    FilterSpec,
    GroupBy,
    GroupSummary,
    Library,
    Metric,
    Summary,
)

PROFILE_RECENT_LIMIT = 3


class EventsListView(BaseModel):
    """Filtered events plus the size of the unfiltered collection."""

    model_config = ConfigDict(frozen=True)

    events: Tuple[Event, ...]
    total: int

    @property
    def shown(self) -> int:
        return len(self.events)


class DashboardView(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: Summary
    upcoming_events: int
    recent_events: Tuple[Event, ...]
    top_categories: Tuple[GroupSummary, ...]
    libraries: Tuple[GroupSummary, ...]


class LibraryProfile(BaseModel):
    """Per-branch statistics shown on the libraries page."""

    model_config = ConfigDict(frozen=True)

    library: Library
    stats: GroupSummary
    category_breakdown: Dict[str, int]
    upcoming_events: int
    recent_events: Tuple[Event, ...]
    attendance_rate: float


class ReportView(BaseModel):
    model_config = ConfigDict(frozen=True)

    spec: FilterSpec
    summary: Summary
    by_library: Tuple[GroupSummary, ...]
    by_category: Tuple[GroupSummary, ...]
    by_month: Tuple[GroupSummary, ...]
    by_funding_source: Tuple[GroupSummary, ...]
    attendance_rate: float


class ReportService(IReportService):
    """High-level facade over the store, filter evaluator and aggregator."""

    def __init__(
        self,
        store: LibraryEventStore,
        aggregator: IEventAggregator | None = None,
        *,
        top_n: int = 5,
        recent_limit: int = 5,
        logger: logging.Logger | None = None,
    ) -> None:
        self._store = store
        self._aggregator = aggregator or EventAggregator(store.categories)
        self._top_n = top_n
        self._recent_limit = recent_limit
        self._logger = logger or logging.getLogger(__name__)

    def events_list(self, spec: Optional[FilterSpec] = None) -> EventsListView:
        events = self._store.events.list()
        return EventsListView(events=tuple(filter_events(events, spec)), total=len(events))

    def dashboard(self, today: Optional[dt.date] = None) -> DashboardView:
        today = today or dt.date.today()
        events = self._store.events.list()
        libraries = self._store.libraries.list()
        known = list(self._store.categories)
        unlisted = [name for name in EventAggregator.category_counts(events) if name not in known]
        categories = self._aggregator.aggregate(
            events, GroupBy.CATEGORY, reference=[*known, *unlisted]
        )
        return DashboardView(
            summary=self._aggregator.summarize(events),
            upcoming_events=EventAggregator.count_upcoming(events, today),
            recent_events=tuple(EventAggregator.recent_events(events, self._recent_limit)),
            top_categories=tuple(top_n(categories, Metric.EVENT_COUNT, self._top_n)),
            libraries=tuple(self._by_library(events, libraries, include_empty_groups=True)),
        )

    def library_profiles(self, today: Optional[dt.date] = None) -> List[LibraryProfile]:
        today = today or dt.date.today()
        events = self._store.events.list()
        libraries = self._store.libraries.list()
        groups = self._by_library(events, libraries, include_empty_groups=True)
        stats_by_name = {group.key: group for group in groups}

        profiles: List[LibraryProfile] = []
        for library in libraries:
            own_events = [event for event in events if event.library == library.name]
            profiles.append(
                LibraryProfile(
                    library=library,
                    stats=stats_by_name[library.name],
                    category_breakdown=EventAggregator.category_counts(own_events),
                    upcoming_events=EventAggregator.count_upcoming(own_events, today),
                    recent_events=tuple(
                        EventAggregator.recent_events(own_events, PROFILE_RECENT_LIMIT)
                    ),
                    attendance_rate=EventAggregator.attendance_rate(own_events, [library]),
                )
            )
        return profiles

    def report(self, spec: Optional[FilterSpec] = None) -> ReportView:
        spec = spec or FilterSpec()
        events = filter_events(self._store.events.list(), spec)
        libraries = self._store.libraries.list()
        self._logger.debug("report_built", extra={"matched_events": len(events)})
        return ReportView(
            spec=spec,
            summary=self._aggregator.summarize(events),
            by_library=tuple(self._by_library(events, libraries)),
            by_category=tuple(self._aggregator.aggregate(events, GroupBy.CATEGORY)),
            by_month=tuple(self._aggregator.aggregate(events, GroupBy.MONTH)),
            by_funding_source=tuple(
                self._aggregator.aggregate(events, GroupBy.FUNDING_SOURCE)
            ),
            attendance_rate=EventAggregator.attendance_rate(events, libraries),
        )

    def to_dataframe(self, spec: Optional[FilterSpec] = None) -> Any:
        """Export the filtered events to a pandas DataFrame."""

        try:
            import pandas as pd  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pandas is required for dataframe export") from exc

        rows = [
            {
                "id": event.id,
                "title": event.title,
                "library": event.library,
                "category": event.category,
                "date": event.date,
                "adults": event.attendees.adults,
                "children": event.attendees.children,
                "cost": event.cost,
                "funding_source": event.funding_source.value,
                "description": event.description,
            }
            for event in self.events_list(spec).events
        ]
        return pd.DataFrame(rows)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _by_library(
        self,
        events: Sequence[Event],
        libraries: Sequence[Library],
        *,
        include_empty_groups: bool = False,
    ) -> List[GroupSummary]:
        return self._aggregator.aggregate(
            events,
            GroupBy.LIBRARY,
            reference=[library.name for library in libraries],
            include_empty_groups=include_empty_groups,
        )
