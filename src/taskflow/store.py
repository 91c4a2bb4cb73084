"""Task store - owns the task collection and every change made to it."""

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Callable

from .core.events import ChangeKind, TaskEvent
from .core.stats import TaskStats, summarize
from .core.tasks import Task, TaskDraft, is_valid_task
from .core.views import View, build_view
from .persistence import TaskPersistence
from .ports.notifier import Notifier
from .undo import PendingUndo, UndoBuffer

logger = logging.getLogger(__name__)


class StoreNotLoadedError(RuntimeError):
    """Raised when the store is changed before load() has run."""

    pass


def _new_id() -> str:
    return uuid.uuid4().hex


def _now_iso() -> str:
    return datetime.now().astimezone().isoformat()


class TaskStore:
    """
    In-memory task collection with write-through persistence.

    Every successful mutation saves the full collection once and sends one
    event to the notifier. Unknown ids are logged and ignored.
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        notifier: Notifier | None = None,
        undo: UndoBuffer | None = None,
        id_factory: Callable[[], str] = _new_id,
        clock: Callable[[], str] = _now_iso,
    ):
        self.persistence = persistence
        self.notifier = notifier
        self.undo = undo or UndoBuffer()
        self._id_factory = id_factory
        self._clock = clock
        self._tasks: list[Task] = []
        self._loaded = False

    # ---- lifecycle ----

    @property
    def loaded(self) -> bool:
        return self._loaded

    def load(self) -> None:
        """Load the collection from persistence. Only the first call has any effect."""
        if self._loaded:
            logger.warning("TaskStore.load() called twice; keeping current collection")
            return
        self._tasks = list(self.persistence.load())
        self._loaded = True
        logger.info(f"TaskStore ready with {len(self._tasks)} tasks")

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise StoreNotLoadedError("Task store must be loaded before it can be changed")

    def _index_of(self, task_id: str) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    def _commit(self, tasks: list[Task], event: TaskEvent) -> None:
        """Swap in the new collection, persist it, then announce the change."""
        self._tasks = tasks
        self.persistence.save(self._tasks)
        self._emit(event)

    def _emit(self, event: TaskEvent) -> None:
        logger.debug(f"Task event {event.kind.value}: {event.task.id if event.task else '-'}")
        if self.notifier is not None:
            self.notifier.notify(event)

    # ---- reads ----

    @property
    def tasks(self) -> list[Task]:
        """Snapshot of the collection, in storage order."""
        return list(self._tasks)

    def get(self, task_id: str) -> Task | None:
        index = self._index_of(task_id)
        return None if index is None else self._tasks[index]

    def view(self, view: View | str, as_of: date | None = None) -> list[Task]:
        """A freshly computed view; as_of defaults to today."""
        return build_view(view, self.tasks, as_of or date.today())

    def all(self, as_of: date | None = None) -> list[Task]:
        return self.view(View.ALL, as_of)

    def today(self, as_of: date | None = None) -> list[Task]:
        return self.view(View.TODAY, as_of)

    def upcoming(self, as_of: date | None = None) -> list[Task]:
        return self.view(View.UPCOMING, as_of)

    def completed(self, as_of: date | None = None) -> list[Task]:
        return self.view(View.COMPLETED, as_of)

    def stats(self, as_of: date | None = None) -> TaskStats:
        return summarize(self.tasks, as_of or date.today())

    # ---- mutations ----

    def _fresh_id(self) -> str:
        existing = {t.id for t in self._tasks}
        pending = self.undo.pending
        if pending is not None:
            existing.add(pending.removed.id)
        task_id = self._id_factory()
        while task_id in existing:
            task_id = self._id_factory()
        return task_id

    def add(self, draft: TaskDraft) -> Task:
        """Create a task from a validated draft and return it."""
        self._require_loaded()
        task = draft.to_task(task_id=self._fresh_id(), created_at=self._clock())
        self._commit([*self._tasks, task], TaskEvent.of(ChangeKind.ADDED, task))
        logger.info(f"Added task {task.id}")
        return task

    def update(self, task: Task) -> bool:
        """Replace the stored task with the same id. id and created_at never change."""
        self._require_loaded()
        if not is_valid_task(task):
            logger.error(f"Refusing to store malformed task: {task!r}")
            return False
        index = self._index_of(task.id)
        if index is None:
            logger.warning(f"Task not found for update: {task.id}")
            return False
        updated = replace(task, created_at=self._tasks[index].created_at)
        tasks = list(self._tasks)
        tasks[index] = updated
        self._commit(tasks, TaskEvent.of(ChangeKind.UPDATED, updated))
        return True

    def delete(self, task_id: str) -> PendingUndo | None:
        """
        Remove a task and make it restorable through the undo buffer.

        Returns the pending undo (removed task + restore()), or None if the
        id is unknown.
        """
        self._require_loaded()
        index = self._index_of(task_id)
        if index is None:
            logger.warning(f"Task not found for deletion: {task_id}")
            return None
        removed = self._tasks[index]
        tasks = self._tasks[:index] + self._tasks[index + 1 :]
        pending = self.undo.hold(removed, self.restore)
        self._commit(tasks, TaskEvent.of(ChangeKind.DELETED, removed))
        logger.info(f"Deleted task {task_id}")
        return pending

    def toggle_complete(self, task_id: str) -> Task | None:
        """Flip a task's completed flag. Returns the new task, or None if not found."""
        self._require_loaded()
        index = self._index_of(task_id)
        if index is None:
            logger.warning(f"Task not found for toggle: {task_id}")
            return None
        toggled = replace(self._tasks[index], completed=not self._tasks[index].completed)
        tasks = list(self._tasks)
        tasks[index] = toggled
        kind = ChangeKind.COMPLETED if toggled.completed else ChangeKind.REOPENED
        self._commit(tasks, TaskEvent.of(kind, toggled))
        return toggled

    def restore(self, task: Task) -> bool:
        """
        Put a previously deleted task back, keeping its id and created_at.

        Refused when the candidate is malformed or its id is already taken.
        """
        self._require_loaded()
        if not is_valid_task(task):
            logger.error(f"Refusing to restore malformed task: {task!r}")
            self._emit(TaskEvent.of(ChangeKind.RESTORE_FAILED))
            return False
        if self._index_of(task.id) is not None:
            logger.error(f"Refusing to restore task {task.id}: id already present")
            self._emit(TaskEvent.of(ChangeKind.RESTORE_FAILED, task))
            return False
        self._commit([*self._tasks, task], TaskEvent.of(ChangeKind.RESTORED, task))
        logger.info(f"Restored task {task.id}")
        return True
