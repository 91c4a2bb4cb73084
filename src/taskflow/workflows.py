"""Shared workflow layer between the CLI and the task store.

Builds a ready-to-use store from config and wraps the draft/validate/apply
steps that every front end needs.
"""

import logging
from dataclasses import replace

from .adapters.file_storage import FileKeyValueStorage
from .config import Config
from .core.tasks import Task, TaskDraft, validate_draft
from .persistence import TaskPersistence
from .ports.notifier import Notifier
from .store import TaskStore
from .undo import UndoBuffer

logger = logging.getLogger(__name__)


def get_storage(config: Config) -> FileKeyValueStorage:
    """Resolve the storage directory from config."""
    return FileKeyValueStorage(config.data_dir)


def build_store(config: Config, notifier: Notifier | None = None) -> TaskStore:
    """Create and load a TaskStore backed by files under config.data_dir."""
    persistence = TaskPersistence(get_storage(config), key=config.storage_key)
    if not config.seed_on_first_run:
        persistence.seed = list
    store = TaskStore(
        persistence,
        notifier=notifier,
        undo=UndoBuffer(window_seconds=config.undo_seconds),
    )
    store.load()
    return store


def create_task(store: TaskStore, draft: TaskDraft) -> tuple[Task | None, list[str]]:
    """Validate and add a draft. Returns (task, []) or (None, problems)."""
    problems = validate_draft(draft)
    if problems:
        logger.info(f"Rejected new task: {'; '.join(problems)}")
        return None, problems
    return store.add(draft), []


def edit_task(store: TaskStore, task_id: str, **changes) -> tuple[Task | None, list[str]]:
    """
    Apply field changes to an existing task.

    None values in changes are ignored. Returns (updated_task, []) on
    success, or (None, problems) if the task is missing or the result is invalid.
    """
    current = store.get(task_id)
    if current is None:
        return None, [f"Task not found: {task_id}"]

    changes = {k: v for k, v in changes.items() if v is not None}
    updated = replace(current, **changes)
    problems = validate_draft(
        TaskDraft(
            title=updated.title,
            due_date=updated.due_date,
            category=updated.category,
            priority=updated.priority,
            description=updated.description,
        )
    )
    if problems:
        return None, problems
    if not store.update(updated):
        return None, [f"Task not found: {task_id}"]
    return store.get(task_id), []
