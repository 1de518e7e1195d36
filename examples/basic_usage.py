"""Basic reporting example using the built-in DI container."""

from library_events.core.config import AppConfig
from library_events.core.container import DIContainer
from library_events.domain.models import FilterSpec


def main() -> None:
    config = AppConfig(storage_backend="memory")
    store = DIContainer.create_store(config=config)
    reports = DIContainer.create_report_service(store, config=config)

    store.events.create(
        {
            "title": "Film Night: Silent Classics",
            "library": "Eastside Branch",
            "category": "Film Screening",
            "date": "2025-02-07",
            "attendees": {"adults": 32, "children": 6},
            "cost": 90,
            "fundingSource": "Donation",
        }
    )

    report = reports.report(FilterSpec(date_from="2025-01-01"))
    print("Events:", report.summary.total_events)
    print("Attendees:", report.summary.total_attendees)
    print("Cost:", report.summary.total_cost)
    for month in report.by_month:
        print(f"  {month.key}: {month.event_count} events, {month.total_attendees} attendees")


if __name__ == "__main__":
    main()
