"""Process-local storage used for tests and throwaway sessions."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, Optional, Sequence

from library_events.domain.interfaces import IRecordStorage


class InMemoryStorage(IRecordStorage):
    """Keeps deep copies so callers never share state with the store."""

    def __init__(self, initial: Optional[Mapping[str, Sequence[Mapping[str, Any]]]] = None):
        self._data: Dict[str, List[Dict[str, Any]]] = {}
        for key, records in (initial or {}).items():
            self.save(key, records)

    def load(self, key: str) -> Optional[List[Mapping[str, Any]]]:
        records = self._data.get(key)
        if records is None:
            return None
        return copy.deepcopy(records)

    def save(self, key: str, records: Sequence[Mapping[str, Any]]) -> None:
        self._data[key] = [copy.deepcopy(dict(record)) for record in records]
