"""Tests for the JSON file repository."""

import json
from datetime import datetime, timedelta, timezone

import pytest

from ticklist.adapters.json_store import JsonTaskStore, StorageError, loads, store_to_dict
from ticklist.core.tasks import TaskStore


@pytest.fixture
def now():
    return datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def repo(tmp_path):
    return JsonTaskStore(tmp_path / "todos.json")


@pytest.fixture
def populated(now):
    store = TaskStore()
    store.add("Write report", 4, now)
    store.add("Buy milk", None, now)
    store.find(2).set_details("2 litres")
    store.find(2).set_due_date(now + timedelta(days=1))
    store.complete(1, now)
    return store


def raw_task(**overrides):
    data = {
        "id": 1,
        "description": "A",
        "details": None,
        "completed": False,
        "created_at": "2025-01-15T12:00:00+00:00",
        "completed_at": None,
        "due_date": None,
        "priority": None,
    }
    data.update(overrides)
    return data


class TestJsonTaskStore:
    def test_missing_file_is_empty_store(self, repo):
        store = repo.load()
        assert len(store) == 0
        assert store.next_id == 1
        assert not repo.exists()

    def test_save_then_load(self, repo, populated):
        repo.save(populated)
        loaded = repo.load()
        assert loaded == populated

    def test_ids_survive_restart(self, repo, populated, now):
        populated.remove(2)
        repo.save(populated)
        loaded = repo.load()
        assert loaded.add("Next", None, now) == 3

    def test_creates_parent_directory(self, tmp_path, populated):
        repo = JsonTaskStore(tmp_path / "nested" / "dir" / "todos.json")
        repo.save(populated)
        assert repo.exists()

    def test_file_shape(self, repo, populated):
        repo.save(populated)
        data = json.loads(repo.path.read_text())
        assert data["next_id"] == 3
        assert [t["id"] for t in data["todos"]] == [1, 2]
        assert data["todos"][0]["completed"] is True
        assert data["todos"][0]["completed_at"] == "2025-01-15T12:00:00+00:00"

    def test_no_temp_files_left(self, repo, populated):
        repo.save(populated)
        repo.save(populated)
        assert [p.name for p in repo.path.parent.iterdir()] == ["todos.json"]

    def test_corrupt_file_raises(self, repo):
        repo.path.write_text("{not json")
        with pytest.raises(StorageError, match="Failed to parse"):
            repo.load()

    def test_undecodable_file_raises(self, repo):
        repo.path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(StorageError, match="Failed to read"):
            repo.load()

    def test_unwritable_location_raises(self, tmp_path, populated):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        repo = JsonTaskStore(blocker / "todos.json")
        with pytest.raises(StorageError, match="Failed to write"):
            repo.save(populated)


class TestLoads:
    def test_accepts_zulu_timestamps(self):
        store = loads(json.dumps({"todos": [raw_task(created_at="2025-01-15T12:00:00Z")], "next_id": 2}))
        assert store.find(1).created_at == datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)

    def test_missing_optional_fields(self):
        data = {"todos": [{"id": 1, "description": "A", "created_at": "2025-01-15T12:00:00+00:00"}], "next_id": 2}
        task = loads(json.dumps(data)).find(1)
        assert task.completed is False
        assert task.details is None
        assert task.priority is None

    def test_repairs_low_next_id(self):
        store = loads(json.dumps({"todos": [raw_task(id=5)], "next_id": 2}))
        assert store.next_id == 6

    def test_rejects_completed_without_timestamp(self):
        with pytest.raises(StorageError, match="inconsistent"):
            loads(json.dumps({"todos": [raw_task(completed=True)], "next_id": 2}))

    def test_rejects_timestamp_without_completed(self):
        with pytest.raises(StorageError, match="inconsistent"):
            loads(json.dumps({"todos": [raw_task(completed_at="2025-01-15T12:00:00+00:00")], "next_id": 2}))

    def test_rejects_duplicate_ids(self):
        with pytest.raises(StorageError, match="Duplicate"):
            loads(json.dumps({"todos": [raw_task(), raw_task()], "next_id": 2}))

    def test_rejects_bad_priority(self):
        with pytest.raises(StorageError):
            loads(json.dumps({"todos": [raw_task(priority=9)], "next_id": 2}))

    def test_rejects_missing_todos(self):
        with pytest.raises(StorageError):
            loads(json.dumps({"next_id": 1}))

    def test_store_to_dict_uses_utc(self, now):
        store = TaskStore()
        store.add("A", None, now.astimezone(timezone(timedelta(hours=5))))
        assert store_to_dict(store)["todos"][0]["created_at"] == "2025-01-15T12:00:00+00:00"
