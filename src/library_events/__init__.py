"""Library event analytics engine following Clean Architecture layering."""

from .analytics.aggregator import EventAggregator
from .analytics.filters import filter_events, matches
from .analytics.ranking import top_n
from .analytics.reports import ReportService
from .core.container import DIContainer
from .core.store import LibraryEventStore

__all__ = [
    "DIContainer",
    "EventAggregator",
    "LibraryEventStore",
    "ReportService",
    "filter_events",
    "matches",
    "top_n",
    "domain",
    "analytics",
    "core",
    "storage",
    "utils",
]
