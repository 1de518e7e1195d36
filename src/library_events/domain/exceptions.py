"""Exception hierarchy for library event engine failures."""

from __future__ import annotations

from typing import Any, Mapping


class LibraryEventsError(Exception):
    """Base class for all domain-level errors in the events engine."""

    default_message = "Library events error occurred"

    def __init__(
        self, message: str | None = None, *, context: Mapping[str, Any] | None = None
    ):
        self.message = message or self.default_message
        self.context: Mapping[str, Any] = dict(context or {})
        formatted = self._format_message()
        super().__init__(formatted)

    def _format_message(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


class ValidationError(LibraryEventsError):
    """Raised when an event or library payload is rejected."""

    default_message = "Record validation failed"

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self.context.get("fields", ()))


class NotFoundError(LibraryEventsError):
    """Raised when a record id is absent from its collection."""

    default_message = "Record not found"


class PersistenceError(LibraryEventsError):
    """Storage collaborator failed to load or save a collection."""

    default_message = "Persistence failure"
