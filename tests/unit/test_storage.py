import json
from pathlib import Path

import pytest

from library_events.domain.exceptions import PersistenceError
from library_events.storage.json_storage import JsonFileStorage
from library_events.storage.memory import InMemoryStorage
from library_events.storage.sqlite_storage import SQLiteStorage

RECORDS = [
    {"id": 1, "name": "Central Library", "location": "123 Main Street", "capacity": 200},
    {"id": 2, "name": "Westside Branch", "location": "456 West Avenue", "capacity": 100},
]


@pytest.fixture(params=["memory", "json", "sqlite"])
def storage(request, tmp_path: Path):
    if request.param == "memory":
        return InMemoryStorage()
    if request.param == "json":
        return JsonFileStorage(tmp_path / "state.json")
    return SQLiteStorage(tmp_path / "state.db")


def test_missing_key_loads_none(storage):
    assert storage.load("libraries") is None


def test_save_and_load_round_trip(storage):
    storage.save("libraries", RECORDS)
    assert storage.load("libraries") == RECORDS


def test_save_overwrites_whole_collection(storage):
    storage.save("libraries", RECORDS)
    storage.save("libraries", RECORDS[:1])
    assert storage.load("libraries") == RECORDS[:1]


def test_keys_are_independent(storage):
    storage.save("libraries", RECORDS)
    storage.save("libraryEvents", [])
    assert storage.load("libraries") == RECORDS
    assert storage.load("libraryEvents") == []


def test_memory_storage_isolates_callers():
    storage = InMemoryStorage()
    records = [dict(record) for record in RECORDS]
    storage.save("libraries", records)
    records[0]["name"] = "mutated"
    loaded = storage.load("libraries")
    loaded[1]["name"] = "also mutated"
    assert storage.load("libraries") == RECORDS


def test_json_storage_writes_single_document(tmp_path: Path):
    path = tmp_path / "nested" / "state.json"
    storage = JsonFileStorage(path)
    storage.save("libraries", RECORDS)
    storage.save("libraryEvents", [])
    assert json.loads(path.read_text()) == {"libraries": RECORDS, "libraryEvents": []}
    assert list(path.parent.glob("*.tmp")) == []


def test_json_storage_rejects_corrupt_file(tmp_path: Path):
    path = tmp_path / "state.json"
    path.write_text("{not json")
    with pytest.raises(PersistenceError):
        JsonFileStorage(path).load("libraries")


def test_json_storage_rejects_non_list_collection(tmp_path: Path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"libraries": {"id": 1}}))
    with pytest.raises(PersistenceError):
        JsonFileStorage(path).load("libraries")


def test_json_storage_empty_file_loads_none(tmp_path: Path):
    path = tmp_path / "state.json"
    path.write_text("")
    assert JsonFileStorage(path).load("libraries") is None


def test_sqlite_storage_wraps_driver_errors(tmp_path: Path):
    with pytest.raises(PersistenceError):
        SQLiteStorage(tmp_path / "missing-dir" / "state.db")
