"""Derived task views - sorting and filtering. Pure functions, no I/O."""

from datetime import date
from enum import Enum

from .results import Result
from .tasks import Priority, Task, plain_value, parse_due_date

PRIORITY_RANK = {
    Priority.URGENT.value: 0,
    Priority.HIGH.value: 1,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 3,
}
UNKNOWN_PRIORITY_RANK = len(PRIORITY_RANK)


class View(Enum):
    """The four list tabs."""

    ALL = "all"
    TODAY = "today"
    UPCOMING = "upcoming"
    COMPLETED = "completed"


def priority_rank(priority: Priority | str) -> int:
    """URGENT=0 ... LOW=3; anything unrecognized sorts after LOW."""
    return PRIORITY_RANK.get(plain_value(priority), UNKNOWN_PRIORITY_RANK)


def due_offset(task: Task, as_of: date) -> Result[int]:
    """Whole calendar days from as_of to the task's due date (negative if overdue)."""
    parsed = parse_due_date(task.due_date)
    if not parsed.ok:
        return Result.failure(parsed.error)
    return Result.success((parsed.value - as_of).days)


def is_overdue(task: Task, as_of: date) -> bool:
    """Due before as_of and still open. Unparseable dates are never overdue."""
    offset = due_offset(task, as_of)
    return offset.ok and offset.value < 0 and not task.completed


def sort_by_due_then_priority(tasks: list[Task], as_of: date) -> list[Task]:
    """
    Sort by due-date offset (ascending), then priority rank.

    Tasks whose due date can't be parsed go after every dated task, still
    ordered by priority among themselves. sorted() is stable, so equal keys
    keep their input order.
    """

    def sort_key(t: Task) -> tuple[int, int, int]:
        offset = due_offset(t, as_of)
        if offset.ok:
            return (0, offset.value, priority_rank(t.priority))
        return (1, 0, priority_rank(t.priority))

    return sorted(tasks, key=sort_key)


def _offset_matches(task: Task, as_of: date, predicate) -> bool:
    offset = due_offset(task, as_of)
    return offset.ok and predicate(offset.value)


def filter_today(tasks: list[Task], as_of: date) -> list[Task]:
    """Tasks due on as_of, completed or not."""
    due_today = [t for t in tasks if _offset_matches(t, as_of, lambda d: d == 0)]
    return sort_by_due_then_priority(due_today, as_of)


def filter_upcoming(tasks: list[Task], as_of: date) -> list[Task]:
    """Open tasks due after as_of. Completed future tasks are left out."""
    upcoming = [
        t for t in tasks if not t.completed and _offset_matches(t, as_of, lambda d: d > 0)
    ]
    return sort_by_due_then_priority(upcoming, as_of)


def filter_completed(tasks: list[Task], as_of: date) -> list[Task]:
    """Completed tasks, still in due-date order."""
    return sort_by_due_then_priority([t for t in tasks if t.completed], as_of)


def all_tasks(tasks: list[Task], as_of: date) -> list[Task]:
    """Every task, in primary order."""
    return sort_by_due_then_priority(tasks, as_of)


_BUILDERS = {
    View.ALL: all_tasks,
    View.TODAY: filter_today,
    View.UPCOMING: filter_upcoming,
    View.COMPLETED: filter_completed,
}


def build_view(view: View | str, tasks: list[Task], as_of: date) -> list[Task]:
    """Compute the named view. Raises ValueError for an unknown view name."""
    return _BUILDERS[View(view)](tasks, as_of)
