import datetime as dt

import pytest

from library_events.domain.exceptions import ValidationError
from library_events.utils.validators import (
    coerce_amount,
    coerce_count,
    normalize_event_payload,
    normalize_library_payload,
    parse_date,
)


def _payload(**overrides):
    data = {
        "title": "Book Club: Modern Fiction",
        "library": "Eastside Branch",
        "category": "Book Club",
        "date": "2025-01-15",
        "attendees": {"adults": "15", "children": ""},
        "cost": "50.5",
        "description": "Monthly discussion",
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 0), ("", 0), ("abc", 0), ("12", 12), ("12.7", 12), (3.9, 3), (-4, 0), ("-2", 0), (True, 0)],
)
def test_coerce_count_is_lenient(raw, expected):
    assert coerce_count(raw) == expected


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 0.0), ("", 0.0), ("n/a", 0.0), ("19.99", 19.99), ("7abc", 7.0), (-3, 0.0), (float("nan"), 0.0)],
)
def test_coerce_amount_is_lenient(raw, expected):
    assert coerce_amount(raw) == expected


def test_parse_date_accepts_iso_strings_and_dates():
    assert parse_date("2025-01-20") == dt.date(2025, 1, 20)
    assert parse_date(dt.datetime(2025, 1, 20, 9, 30)) == dt.date(2025, 1, 20)
    with pytest.raises(ValueError):
        parse_date("20/01/2025")


def test_normalize_event_payload_coerces_numbers_and_defaults_funding():
    fields = normalize_event_payload(_payload())
    assert fields["attendees"] == {"adults": 15, "children": 0}
    assert fields["cost"] == 50.5
    assert fields["fundingSource"] == "Library Budget"
    assert fields["date"] == dt.date(2025, 1, 15)


def test_normalize_event_payload_accepts_snake_case_funding():
    fields = normalize_event_payload(_payload(funding_source="Donation"))
    assert fields["fundingSource"] == "Donation"


def test_normalize_event_payload_reports_every_missing_field():
    with pytest.raises(ValidationError) as exc_info:
        normalize_event_payload(_payload(title=" ", library="", date="not-a-date"))
    assert exc_info.value.fields == ("title", "library", "date")


def test_normalize_event_payload_rejects_unknown_category_and_funding():
    with pytest.raises(ValidationError) as exc_info:
        normalize_event_payload(_payload(category="Karaoke", fundingSource="Lottery"))
    assert exc_info.value.fields == ("category", "fundingSource")


def test_normalize_event_payload_uses_configured_categories():
    fields = normalize_event_payload(_payload(category="Karaoke"), categories=["Karaoke"])
    assert fields["category"] == "Karaoke"


def test_normalize_library_payload():
    assert normalize_library_payload({"name": " Northside ", "capacity": "abc"}) == {
        "name": "Northside",
        "location": "",
        "capacity": 0,
    }
    with pytest.raises(ValidationError):
        normalize_library_payload({"location": "Nowhere"})
