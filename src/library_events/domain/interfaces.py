"""Domain-level interfaces defining contracts for engine collaborators."""

from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, List, Mapping, Optional, Protocol, Sequence

from .models import Event, FilterSpec, GroupBy, GroupSummary, Summary

EVENTS_KEY = "libraryEvents"
LIBRARIES_KEY = "libraries"


class IRecordStorage(Protocol):
    """Key-value store holding whole collections of JSON-compatible records."""

    def load(self, key: str) -> Optional[List[Mapping[str, Any]]]:
        """Return the collection stored under ``key`` or None when absent."""

    def save(self, key: str, records: Sequence[Mapping[str, Any]]) -> None:
        """Overwrite the collection stored under ``key``."""


class IEventAggregator(Protocol):
    """Groups event sets and reduces them to statistics."""

    def summarize(self, events: Sequence[Event]) -> Summary:
        """Return whole-set statistics."""

    def aggregate(
        self,
        events: Sequence[Event],
        group_by: GroupBy | str,
        *,
        reference: Optional[Iterable[str]] = None,
        include_empty_groups: bool = False,
    ) -> List[GroupSummary]:
        """Bucket events by ``group_by`` and summarize each bucket."""


class IReportService(Protocol):
    """Read side consumed by the presentation surfaces."""

    def events_list(self, spec: Optional[FilterSpec] = None) -> Any:
        """Return the filtered events list view."""

    def dashboard(self, today: Optional[dt.date] = None) -> Any:
        """Return the dashboard view."""

    def library_profiles(self, today: Optional[dt.date] = None) -> List[Any]:
        """Return one profile per known library."""

    def report(self, spec: Optional[FilterSpec] = None) -> Any:
        """Return the reports page view."""


__all__ = [
    "EVENTS_KEY",
    "LIBRARIES_KEY",
    "IRecordStorage",
    "IEventAggregator",
    "IReportService",
]
