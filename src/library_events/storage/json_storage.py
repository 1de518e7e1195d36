"""JSON-document storage, one file holding every collection by key."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from library_events.domain.exceptions import PersistenceError
from library_events.domain.interfaces import IRecordStorage


class JsonFileStorage(IRecordStorage):
    """Rewrites the whole document on every save."""

    def __init__(self, path: str | Path, logger: logging.Logger | None = None):
        self._path = Path(path)
        self._logger = logger or logging.getLogger(__name__)

    @property
    def path(self) -> Path:
        return self._path

    def load(self, key: str) -> Optional[List[Mapping[str, Any]]]:
        records = self._read_document().get(key)
        if records is None:
            return None
        if not isinstance(records, list):
            raise PersistenceError(
                "Stored collection is not a list", context={"key": key, "path": str(self._path)}
            )
        return records

    def save(self, key: str, records: Sequence[Mapping[str, Any]]) -> None:
        document = self._read_document()
        document[key] = [dict(record) for record in records]
        self._write_document(document)
        self._logger.debug(
            "json_collection_written",
            extra={"key": key, "records": len(records), "path": str(self._path)},
        )

    def _read_document(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(
                "Unable to read storage file", context={"path": str(self._path)}
            ) from exc
        if not raw.strip():
            return {}
        try:
            document = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceError(
                "Storage file is not valid JSON", context={"path": str(self._path)}
            ) from exc
        if not isinstance(document, dict):
            raise PersistenceError(
                "Storage file must hold a JSON object", context={"path": str(self._path)}
            )
        return document

    def _write_document(self, document: Mapping[str, Any]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(
                "Unable to write storage file", context={"path": str(self._path)}
            ) from exc
