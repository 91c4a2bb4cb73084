"""Change notifications emitted by the task store."""

from dataclasses import dataclass
from enum import Enum

from .tasks import Task


class ChangeKind(Enum):
    ADDED = "added"
    UPDATED = "updated"
    DELETED = "deleted"
    COMPLETED = "completed"
    REOPENED = "reopened"
    RESTORED = "restored"
    RESTORE_FAILED = "restore_failed"


_MESSAGES = {
    ChangeKind.ADDED: ("Task added", "Your task has been successfully added."),
    ChangeKind.UPDATED: ("Task updated", "Your task has been successfully updated."),
    ChangeKind.DELETED: ("Task deleted", "Your task has been removed."),
    ChangeKind.COMPLETED: ("Task completed", "Your task has been marked as complete."),
    ChangeKind.REOPENED: ("Task reopened", "Your task has been reopened."),
    ChangeKind.RESTORED: ("Task restored", "Your task has been restored successfully."),
    ChangeKind.RESTORE_FAILED: (
        "Restore failed",
        "Could not restore the task due to missing data.",
    ),
}


@dataclass(frozen=True)
class TaskEvent:
    """One user-facing notification about a change to the collection."""

    kind: ChangeKind
    task: Task | None
    title: str
    message: str

    @property
    def is_error(self) -> bool:
        return self.kind is ChangeKind.RESTORE_FAILED

    @classmethod
    def of(cls, kind: ChangeKind, task: Task | None = None) -> "TaskEvent":
        title, message = _MESSAGES[kind]
        return cls(kind=kind, task=task, title=title, message=message)
