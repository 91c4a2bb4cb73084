"""Tests for task persistence and the storage adapters."""

import json
from datetime import date
from unittest.mock import patch

import pytest

from taskflow.adapters.file_storage import FileKeyValueStorage
from taskflow.adapters.memory_storage import MemoryKeyValueStorage
from taskflow.core.seed import default_tasks
from taskflow.core.tasks import Category, Priority, Task
from taskflow.persistence import STORAGE_KEY, TaskPersistence, deserialize_tasks


@pytest.fixture
def today():
    return date(2025, 1, 15)


@pytest.fixture
def tasks():
    return [
        Task(
            id="1",
            title="Pay rent",
            description="",
            due_date="2025-02-01T00:00:00+01:00",
            category=Category.PERSONAL,
            priority=Priority.URGENT,
            completed=False,
            created_at="2025-01-10T08:00:00+01:00",
        ),
        Task(
            id="2",
            title="Ship release",
            description="Tag and publish",
            due_date="2025-01-15T00:00:00",
            category=Category.WORK,
            priority=Priority.HIGH,
            completed=True,
            created_at="2025-01-11T08:00:00",
        ),
    ]


@pytest.fixture
def persistence(today):
    return TaskPersistence(MemoryKeyValueStorage(), seed=lambda: default_tasks(today))


class FailingStorage(MemoryKeyValueStorage):
    """Storage whose writes always fail, e.g. disk full."""

    def set(self, key: str, value: str) -> None:
        raise OSError("No space left on device")


class TestRoundTrip:
    def test_save_then_load(self, persistence, tasks):
        assert persistence.save(tasks) is True
        assert persistence.load() == tasks

    def test_empty_collection(self, persistence):
        persistence.save([])
        assert persistence.load() == []

    def test_stored_shape(self, persistence, tasks):
        persistence.save(tasks)
        stored = json.loads(persistence.storage.get(STORAGE_KEY))
        assert isinstance(stored, list)
        assert set(stored[0]) == {
            "id",
            "title",
            "description",
            "dueDate",
            "category",
            "priority",
            "completed",
            "createdAt",
        }
        assert stored[1]["priority"] == "HIGH"

    def test_save_overwrites(self, persistence, tasks):
        persistence.save(tasks)
        persistence.save(tasks[:1])
        assert persistence.load() == tasks[:1]

    def test_custom_key(self, tasks):
        storage = MemoryKeyValueStorage()
        TaskPersistence(storage, key="other").save(tasks)
        assert storage.get(STORAGE_KEY) is None
        assert storage.get("other") is not None


class TestLoadFallbacks:
    def test_missing_slot_returns_seed(self, persistence, today):
        assert persistence.load() == default_tasks(today)

    def test_invalid_json_returns_seed(self, persistence, today):
        persistence.storage.set(STORAGE_KEY, "{not json")
        assert persistence.load() == default_tasks(today)

    def test_non_array_returns_seed(self, persistence, today):
        persistence.storage.set(STORAGE_KEY, '{"id": "1"}')
        assert persistence.load() == default_tasks(today)

    def test_read_error_returns_seed(self, today):
        class BrokenStorage(MemoryKeyValueStorage):
            def get(self, key):
                raise OSError("permission denied")

        persistence = TaskPersistence(BrokenStorage(), seed=lambda: default_tasks(today))
        assert persistence.load() == default_tasks(today)

    def test_read_reports_failure(self, persistence):
        persistence.storage.set(STORAGE_KEY, "[")
        result = persistence.read()
        assert not result.ok
        assert "corrupt" in result.error

    def test_read_missing_is_success_without_value(self, persistence):
        result = persistence.read()
        assert result.ok
        assert result.value is None

    def test_load_logs_corruption(self, persistence, caplog):
        persistence.storage.set(STORAGE_KEY, "garbage")
        with caplog.at_level("ERROR", logger="taskflow.persistence"):
            persistence.load()
        assert "Error loading tasks" in caplog.text


class TestDeserialize:
    def test_skips_invalid_records(self, tasks):
        records = [tasks[0].to_dict(), {"id": "broken"}, "nope", tasks[1].to_dict()]
        result = deserialize_tasks(json.dumps(records))
        assert result.ok
        assert result.value == tasks

    def test_duplicate_ids_keep_first(self, tasks):
        duplicate = dict(tasks[1].to_dict(), id="1")
        result = deserialize_tasks(json.dumps([tasks[0].to_dict(), duplicate]))
        assert [t.title for t in result.value] == ["Pay rent"]


class TestSaveFailure:
    def test_failed_write_returns_false(self, tasks):
        persistence = TaskPersistence(FailingStorage())
        assert persistence.save(tasks) is False

    def test_failed_write_reported(self, tasks):
        result = TaskPersistence(FailingStorage()).write(tasks)
        assert not result.ok
        assert "No space left" in result.error

    def test_failed_write_keeps_previous_value(self, tmp_path, tasks):
        storage = FileKeyValueStorage(tmp_path)
        persistence = TaskPersistence(storage)
        persistence.save(tasks)

        with patch("taskflow.adapters.file_storage.os.replace", side_effect=OSError("quota")):
            assert persistence.save(tasks[:1]) is False

        assert persistence.load() == tasks
        assert list(tmp_path.glob("*.tmp")) == []


class TestFileKeyValueStorage:
    def test_missing_key(self, tmp_path):
        assert FileKeyValueStorage(tmp_path).get("nothing") is None

    def test_set_and_get(self, tmp_path):
        storage = FileKeyValueStorage(tmp_path)
        storage.set("k", "value")
        assert storage.get("k") == "value"
        assert storage.exists("k")
        assert (tmp_path / "k.json").read_text() == "value"

    def test_creates_directory(self, tmp_path):
        data_dir = tmp_path / "nested" / "data"
        FileKeyValueStorage(data_dir)
        assert data_dir.is_dir()


class TestSeed:
    def test_deterministic(self, today):
        assert default_tasks(today) == default_tasks(today)

    def test_unique_ids(self, today):
        seed_ids = [t.id for t in default_tasks(today)]
        assert len(seed_ids) == len(set(seed_ids))
