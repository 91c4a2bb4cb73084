"""Summary counts for the task list header."""

from dataclasses import dataclass
from datetime import date

from .tasks import Task
from .views import due_offset, is_overdue


@dataclass
class TaskStats:
    total: int
    completed: int
    pending: int
    overdue: int
    due_today: int

    @property
    def completion_rate(self) -> float:
        """Completed share of all tasks, 0.0 when there are none."""
        if not self.total:
            return 0.0
        return self.completed / self.total


def summarize(tasks: list[Task], as_of: date) -> TaskStats:
    """Count tasks by state. Pure function - no I/O."""
    completed = sum(1 for t in tasks if t.completed)
    return TaskStats(
        total=len(tasks),
        completed=completed,
        pending=len(tasks) - completed,
        overdue=sum(1 for t in tasks if is_overdue(t, as_of)),
        due_today=sum(1 for t in tasks if due_offset(t, as_of).unwrap_or(None) == 0),
    )
