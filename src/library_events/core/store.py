"""Store facade owning the canonical event and library collections."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from library_events.core.seed import SAMPLE_EVENTS, SAMPLE_LIBRARIES
from library_events.domain.exceptions import NotFoundError, PersistenceError, ValidationError
from library_events.domain.interfaces import EVENTS_KEY, LIBRARIES_KEY, IRecordStorage
from library_events.domain.models import DEFAULT_CATEGORIES, Event, Library
from library_events.utils.validators import normalize_event_payload, normalize_library_payload

RecordT = TypeVar("RecordT", Event, Library)

Payload = Mapping[str, Any] | BaseModel


class RecordCollection(Generic[RecordT]):
    """One ordered collection persisted whole under a fixed storage key.

    Ids are ``max(existing) + 1`` (or 1 when empty). Every mutation is applied
    in memory first and then flushed; a flush failure raises
    :class:`PersistenceError` but keeps the in-memory change.
    """

    def __init__(
        self,
        key: str,
        model: Type[RecordT],
        normalizer: Callable[[Mapping[str, Any]], Dict[str, Any]],
        storage: IRecordStorage,
        logger: logging.Logger,
    ) -> None:
        self._key = key
        self._model = model
        self._normalizer = normalizer
        self._storage = storage
        self._logger = logger
        self._records: List[RecordT] = []

    @property
    def key(self) -> str:
        return self._key

    def list(self) -> tuple[RecordT, ...]:
        return tuple(self._records)

    def get(self, record_id: int) -> RecordT:
        for record in self._records:
            if record.id == record_id:
                return record
        raise NotFoundError(context={"collection": self._key, "id": record_id})

    def next_id(self) -> int:
        if not self._records:
            return 1
        return max(record.id for record in self._records) + 1

    def create(self, payload: Payload) -> RecordT:
        fields = self._normalize(payload)
        record = self._build({**fields, "id": self.next_id()})
        self._records = [*self._records, record]
        self._logger.info(
            "record_created", extra={"collection": self._key, "id": record.id}
        )
        self._persist()
        return record

    def update(self, record_id: int, payload: Payload) -> RecordT:
        index = self._index_of(record_id)
        if index is None:
            raise NotFoundError(context={"collection": self._key, "id": record_id})
        fields = self._normalize(payload)
        record = self._build({**fields, "id": record_id})
        records = list(self._records)
        records[index] = record
        self._records = records
        self._logger.info(
            "record_updated", extra={"collection": self._key, "id": record_id}
        )
        self._persist()
        return record

    def delete(self, record_id: int) -> None:
        remaining = [record for record in self._records if record.id != record_id]
        if len(remaining) == len(self._records):
            self._logger.debug(
                "record_delete_missing", extra={"collection": self._key, "id": record_id}
            )
        else:
            self._logger.info(
                "record_deleted", extra={"collection": self._key, "id": record_id}
            )
        self._records = remaining
        self._persist()

    def load(self, seed: Optional[Sequence[Mapping[str, Any]]] = None) -> bool:
        """Read the collection from storage, writing ``seed`` when nothing is stored.

        Returns True when the seed was used.
        """

        stored = self._read()
        if stored is None and seed is not None:
            self._records = [self._restore(record) for record in seed]
            self._logger.info(
                "collection_seeded",
                extra={"collection": self._key, "records": len(self._records)},
            )
            self._persist()
            return True
        self._records = [self._restore(record) for record in stored or []]
        self._logger.debug(
            "collection_loaded",
            extra={"collection": self._key, "records": len(self._records)},
        )
        return False

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _index_of(self, record_id: int) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def _normalize(self, payload: Payload) -> Dict[str, Any]:
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(by_alias=True)
        return self._normalizer(payload)

    def _build(self, fields: Mapping[str, Any]) -> RecordT:
        try:
            return self._model.model_validate(fields)
        except PydanticValidationError as exc:
            bad = sorted({str(error["loc"][0]) for error in exc.errors() if error["loc"]})
            raise ValidationError(
                f"Invalid {self._model.__name__.lower()} record",
                context={"fields": bad},
            ) from exc

    def _restore(self, raw: Mapping[str, Any]) -> RecordT:
        try:
            return self._model.model_validate(raw)
        except PydanticValidationError as exc:
            raise PersistenceError(
                "Stored record is malformed",
                context={"collection": self._key, "id": raw.get("id")},
            ) from exc

    def _read(self) -> Optional[List[Mapping[str, Any]]]:
        try:
            return self._storage.load(self._key)
        except PersistenceError:
            self._logger.error(
                "collection_load_failed", extra={"collection": self._key}, exc_info=True
            )
            raise
        except Exception as exc:
            self._logger.error(
                "collection_load_failed", extra={"collection": self._key}, exc_info=True
            )
            raise PersistenceError(
                "Unable to load collection", context={"collection": self._key}
            ) from exc

    def _persist(self) -> None:
        try:
            self._storage.save(self._key, [record.to_record() for record in self._records])
        except PersistenceError:
            self._logger.error(
                "collection_persist_failed", extra={"collection": self._key}, exc_info=True
            )
            raise
        except Exception as exc:
            self._logger.error(
                "collection_persist_failed", extra={"collection": self._key}, exc_info=True
            )
            raise PersistenceError(
                "Unable to persist collection", context={"collection": self._key}
            ) from exc
        self._logger.debug(
            "collection_persisted",
            extra={"collection": self._key, "records": len(self._records)},
        )


class LibraryEventStore:
    """Single owner of the event and library collections.

    Consumers receive the store by reference and go through ``events`` and
    ``libraries`` for every read and write.
    """

    def __init__(
        self,
        storage: IRecordStorage,
        *,
        categories: Sequence[str] = DEFAULT_CATEGORIES,
        seed_on_empty: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self._storage = storage
        self._categories = tuple(categories)
        self._seed_on_empty = seed_on_empty
        self._logger = logger or logging.getLogger(__name__)
        self.events: RecordCollection[Event] = RecordCollection(
            EVENTS_KEY,
            Event,
            lambda payload: normalize_event_payload(payload, self._categories),
            storage,
            self._logger,
        )
        self.libraries: RecordCollection[Library] = RecordCollection(
            LIBRARIES_KEY,
            Library,
            normalize_library_payload,
            storage,
            self._logger,
        )

    @property
    def categories(self) -> tuple[str, ...]:
        return self._categories

    def load(self) -> "LibraryEventStore":
        """Load both collections, seeding sample data on a fresh install."""

        self.events.load(SAMPLE_EVENTS if self._seed_on_empty else None)
        self.libraries.load(SAMPLE_LIBRARIES if self._seed_on_empty else None)
        return self
