import pytest

from library_events.analytics.ranking import top_n
from library_events.domain.models import GroupSummary, Metric


def _group(key: str, count: int, attendees: int = 0, cost: float = 0.0) -> GroupSummary:
    return GroupSummary(
        key=key, event_count=count, total_attendees=attendees, total_cost=cost
    )


@pytest.fixture
def groups() -> list[GroupSummary]:
    return [
        _group("Book Club", 1, attendees=15, cost=50),
        _group("Author Talk", 3, attendees=45, cost=500),
        _group("Workshop", 1, attendees=23, cost=300),
        _group("Computer Class", 3, attendees=20, cost=200),
    ]


def test_sorts_descending_with_stable_ties(groups):
    ranked = top_n(groups, Metric.EVENT_COUNT, 10)
    assert [group.key for group in ranked] == [
        "Author Talk",
        "Computer Class",
        "Book Club",
        "Workshop",
    ]


def test_truncates_to_n(groups):
    ranked = top_n(groups, "total_cost", 2)
    assert [group.key for group in ranked] == ["Author Talk", "Workshop"]


def test_n_at_or_above_length_returns_everything(groups):
    assert len(top_n(groups, Metric.TOTAL_ATTENDEES, len(groups))) == len(groups)
    assert len(top_n(groups, Metric.TOTAL_ATTENDEES, 99)) == len(groups)
    assert top_n(groups, Metric.EVENT_COUNT, 0) == []


def test_is_deterministic_and_does_not_mutate_input(groups):
    original = list(groups)
    first = top_n(groups, Metric.EVENT_COUNT, 3)
    second = top_n(groups, Metric.EVENT_COUNT, 3)
    assert first == second
    assert groups == original


def test_rejects_unknown_metric_and_negative_n(groups):
    with pytest.raises(ValueError):
        top_n(groups, "average_cost", 2)
    with pytest.raises(ValueError):
        top_n(groups, Metric.EVENT_COUNT, -1)
