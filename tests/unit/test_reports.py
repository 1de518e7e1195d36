import datetime as dt
import sys
import builtins

import pytest

from library_events.analytics.reports import ReportService
from library_events.core.seed import SAMPLE_EVENTS
from library_events.core.store import LibraryEventStore
from library_events.domain.interfaces import EVENTS_KEY
from library_events.domain.models import FilterSpec
from library_events.storage.memory import InMemoryStorage

TODAY = dt.date(2025, 1, 12)


@pytest.fixture
def store() -> LibraryEventStore:
    return LibraryEventStore(InMemoryStorage()).load()


@pytest.fixture
def service(store) -> ReportService:
    return ReportService(store)


def test_events_list_reports_shown_and_total(service):
    view = service.events_list(FilterSpec.single(library="Westside Branch"))
    assert [event.id for event in view.events] == [2, 5]
    assert view.shown == 2
    assert view.total == 5


def test_dashboard(service):
    view = service.dashboard(TODAY)

    assert view.summary.total_events == 5
    assert view.summary.total_attendees == 136
    assert view.summary.total_cost == 1200
    assert view.upcoming_events == 2
    assert [event.id for event in view.recent_events] == [5, 4, 3, 2, 1]
    assert [group.key for group in view.top_categories] == [
        "Book Club",
        "Author Talk",
        "Children's Storytime",
        "Workshop",
        "Computer Class",
    ]
    assert [(group.key, group.event_count) for group in view.libraries] == [
        ("Central Library", 2),
        ("Westside Branch", 2),
        ("Eastside Branch", 1),
    ]


def test_dashboard_top_categories_rank_by_count(store, service):
    store.events.create(
        {
            "title": "Family Workshop",
            "library": "Central Library",
            "category": "Workshop",
            "date": "2025-02-01",
        }
    )
    view = service.dashboard(TODAY)
    assert view.top_categories[0].key == "Workshop"
    assert view.top_categories[0].event_count == 2


def test_dashboard_top_categories_keep_unlisted_categories():
    store = LibraryEventStore(
        InMemoryStorage({EVENTS_KEY: SAMPLE_EVENTS}), categories=["Karaoke"]
    ).load()

    view = ReportService(store).dashboard(TODAY)

    assert view.summary.total_events == 5
    assert {group.key for group in view.top_categories} == {
        "Children's Storytime",
        "Author Talk",
        "Computer Class",
        "Book Club",
        "Workshop",
    }
    assert all(group.event_count == 1 for group in view.top_categories)


def test_library_profiles_include_empty_libraries(store, service):
    store.libraries.create({"name": "Northside Branch", "capacity": 40})

    profiles = service.library_profiles(TODAY)

    assert [profile.library.name for profile in profiles] == [
        "Central Library",
        "Westside Branch",
        "Eastside Branch",
        "Northside Branch",
    ]
    central = profiles[0]
    assert central.stats.event_count == 2
    assert central.stats.total_attendees == 53
    assert central.category_breakdown == {"Children's Storytime": 1, "Computer Class": 1}
    assert central.upcoming_events == 0
    assert [event.id for event in central.recent_events] == [3, 1]
    assert central.attendance_rate == pytest.approx(13.25)

    northside = profiles[-1]
    assert northside.stats.event_count == 0
    assert northside.stats.average_cost == 0
    assert northside.recent_events == ()
    assert northside.attendance_rate == 0


def test_report_with_date_filter(service):
    view = service.report(FilterSpec(date_from="2025-01-01"))

    assert view.summary.total_events == 3
    assert view.summary.total_cost == 550
    assert [group.key for group in view.by_library] == [
        "Central Library",
        "Westside Branch",
        "Eastside Branch",
    ]
    assert [group.key for group in view.by_category] == [
        "Book Club",
        "Workshop",
        "Computer Class",
    ]
    assert [group.key for group in view.by_month] == ["2025-Jan"]
    assert [(group.key, group.total_cost) for group in view.by_funding_source] == [
        ("Library Budget", 200),
        ("Donation", 300),
        ("Other", 50),
    ]
    assert view.summary.total_adults == 40
    assert view.summary.total_children == 18


def test_report_excludes_empty_library_groups(service):
    view = service.report(FilterSpec(libraries={"Eastside Branch"}))
    assert [group.key for group in view.by_library] == ["Eastside Branch"]
    # 15 attendees at an 80 seat branch
    assert view.attendance_rate == pytest.approx(18.75)


def test_report_without_spec_covers_everything(service):
    view = service.report()
    assert view.spec == FilterSpec()
    assert view.summary.total_events == 5


def test_to_dataframe_returns_rows(monkeypatch, service):
    class FakePandasModule:
        def __init__(self):
            self.data = None

        def DataFrame(self, data):
            self.data = data
            return data

    fake_pd = FakePandasModule()
    monkeypatch.setitem(sys.modules, "pandas", fake_pd)

    df = service.to_dataframe(FilterSpec(categories={"Book Club"}))

    assert df[0]["title"] == "Book Club: Modern Fiction"
    assert df[0]["funding_source"] == "Other"
    assert df[0]["description"] == "Monthly book discussion group"
    assert fake_pd.data == df


def test_to_dataframe_raises_without_pandas(monkeypatch, service):
    real_import = builtins.__import__

    def fake_import(name, *args, **kwargs):
        if name == "pandas":
            raise ImportError("no pandas")
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", fake_import)

    with pytest.raises(RuntimeError):
        service.to_dataframe()
