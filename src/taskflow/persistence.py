"""Task persistence - JSON round-trip of the whole collection to one storage slot."""

import json
import logging
from datetime import date
from typing import Callable

from .core.results import Result
from .core.seed import default_tasks
from .core.tasks import Task, task_from_record
from .ports.storage import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "taskflow-tasks"


def _today_seed() -> list[Task]:
    return default_tasks(date.today())


def serialize_tasks(tasks: list[Task]) -> str:
    """Encode the collection as a JSON array of records."""
    return json.dumps([t.to_dict() for t in tasks], indent=2)


def deserialize_tasks(raw: str) -> Result[list[Task]]:
    """
    Decode a stored JSON array.

    Invalid JSON or a non-array payload is a failure. Records that fail the
    validity check, or repeat an earlier id, are skipped with a warning.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        return Result.failure(f"corrupt task data: {e}")
    if not isinstance(data, list):
        return Result.failure(f"expected a JSON array, got {type(data).__name__}")

    tasks: list[Task] = []
    seen: set[str] = set()
    for record in data:
        parsed = task_from_record(record)
        if not parsed.ok:
            logger.warning(f"Skipping stored task: {parsed.error}")
            continue
        task = parsed.value
        if task.id in seen:
            logger.warning(f"Skipping stored task with duplicate id {task.id!r}")
            continue
        seen.add(task.id)
        tasks.append(task)
    return Result.success(tasks)


class TaskPersistence:
    """
    Reads and writes the task collection under a single fixed key.

    read()/write() report failures as Result values; load()/save() are the
    boundary versions that log and fall back instead.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = STORAGE_KEY,
        seed: Callable[[], list[Task]] = _today_seed,
    ):
        self.storage = storage
        self.key = key
        self.seed = seed

    def read(self) -> Result[list[Task]]:
        """Read the stored collection. Success with None value means nothing stored."""
        try:
            raw = self.storage.get(self.key)
        except (OSError, UnicodeDecodeError) as e:
            return Result.failure(f"could not read {self.key!r}: {e}")
        if raw is None:
            return Result.success(None)
        return deserialize_tasks(raw)

    def write(self, tasks: list[Task]) -> Result[None]:
        """Overwrite the stored collection."""
        try:
            self.storage.set(self.key, serialize_tasks(tasks))
        except (OSError, TypeError, ValueError) as e:
            return Result.failure(f"could not write {self.key!r}: {e}")
        return Result.success()

    def load(self) -> list[Task]:
        """Load tasks, falling back to the seed collection. Never raises."""
        result = self.read()
        if not result.ok:
            logger.error(f"Error loading tasks: {result.error}")
            return self.seed()
        if result.value is None:
            logger.info(f"No stored tasks under {self.key!r}, using defaults")
            return self.seed()
        logger.debug(f"Loaded {len(result.value)} tasks from {self.key!r}")
        return result.value

    def save(self, tasks: list[Task]) -> bool:
        """Save tasks. Returns False (and logs) if the write failed."""
        result = self.write(tasks)
        if not result.ok:
            logger.error(f"Error saving tasks: {result.error}")
            return False
        logger.debug(f"Saved {len(tasks)} tasks to {self.key!r}")
        return True
