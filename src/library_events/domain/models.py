"""Domain value objects representing library programs and branches."""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_CATEGORIES: Tuple[str, ...] = (
    "Book Club",
    "Author Talk",
    "Children's Storytime",
    "Workshop",
    "Reading Group",
    "Computer Class",
    "Film Screening",
    "Art Exhibition",
    "Community Meeting",
    "Educational Program",
)


class FundingSource(str, Enum):
    """Where the money for an event came from."""

    LIBRARY_BUDGET = "Library Budget"
    DONATION = "Donation"
    OTHER = "Other"


FUNDING_SOURCES: Tuple[str, ...] = tuple(source.value for source in FundingSource)


class Attendees(BaseModel):
    """Head count split between adults and children."""

    model_config = ConfigDict(frozen=True)

    adults: int = Field(default=0, ge=0)
    children: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.adults + self.children


class Event(BaseModel):
    """Immutable record of one library program occurrence.

    ``library`` holds the branch *name*, not its id. Renaming or deleting a
    library leaves its historical events pointing at the old name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(..., ge=1)
    title: str
    library: str
    category: str
    date: dt.date
    attendees: Attendees = Field(default_factory=Attendees)
    cost: float = Field(default=0.0, ge=0)
    funding_source: FundingSource = Field(
        default=FundingSource.LIBRARY_BUDGET, alias="fundingSource"
    )
    description: str = ""

    @property
    def total_attendees(self) -> int:
        return self.attendees.total

    def to_record(self) -> dict:
        """Serialize using the persisted field names."""

        return self.model_dump(mode="json", by_alias=True)


class Library(BaseModel):
    """Immutable record of a physical branch."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1)
    name: str
    location: str = ""
    capacity: int = Field(default=0, ge=0)

    def to_record(self) -> dict:
        return self.model_dump(mode="json")


class GroupBy(str, Enum):
    """Supported grouping keys for aggregation."""

    NONE = "none"
    LIBRARY = "library"
    CATEGORY = "category"
    MONTH = "month"
    FUNDING_SOURCE = "funding_source"


class Metric(str, Enum):
    """Group summary fields that can drive a ranking."""

    EVENT_COUNT = "event_count"
    TOTAL_ATTENDEES = "total_attendees"
    TOTAL_COST = "total_cost"


class Summary(BaseModel):
    """Whole-set statistics for a collection of events."""

    model_config = ConfigDict(frozen=True)

    total_events: int = 0
    total_attendees: int = 0
    total_adults: int = 0
    total_children: int = 0
    total_cost: float = 0.0
    average_attendees: float = 0.0
    average_cost: float = 0.0


class GroupSummary(BaseModel):
    """Reduced statistics for one bucket of events sharing a key."""

    model_config = ConfigDict(frozen=True)

    key: str
    event_count: int = 0
    total_attendees: int = 0
    total_adults: int = 0
    total_children: int = 0
    total_cost: float = 0.0
    average_attendees: float = 0.0
    average_cost: float = 0.0
    sort_key: Optional[dt.date] = Field(default=None, exclude=True)


class FilterSpec(BaseModel):
    """Which events a derived view should include.

    Every field is optional. Empty ``libraries``/``categories`` mean "all",
    and a missing date bound leaves that side unconstrained.
    """

    model_config = ConfigDict(frozen=True)

    text: Optional[str] = None
    libraries: FrozenSet[str] = Field(default_factory=frozenset)
    categories: FrozenSet[str] = Field(default_factory=frozenset)
    date_from: Optional[dt.date] = None
    date_to: Optional[dt.date] = None

    @classmethod
    def single(
        cls,
        *,
        text: Optional[str] = None,
        library: Optional[str] = None,
        category: Optional[str] = None,
        date_from: Optional[dt.date | str] = None,
        date_to: Optional[dt.date | str] = None,
    ) -> "FilterSpec":
        """Build a spec from single-selection inputs (one library, one category)."""

        return cls(
            text=text or None,
            libraries=frozenset({library}) if library else frozenset(),
            categories=frozenset({category}) if category else frozenset(),
            date_from=date_from or None,
            date_to=date_to or None,
        )
