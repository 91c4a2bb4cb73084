"""Functional core - pure business logic with no I/O."""

from .tasks import (
    Task,
    TaskDraft,
    Priority,
    Category,
    is_valid_task,
    parse_due_date,
    task_from_record,
    validate_draft,
)
from .views import (
    View,
    build_view,
    due_offset,
    is_overdue,
    priority_rank,
    sort_by_due_then_priority,
    filter_today,
    filter_upcoming,
    filter_completed,
    all_tasks,
)
from .events import ChangeKind, TaskEvent
from .results import Result
from .seed import default_tasks
from .stats import TaskStats, summarize

__all__ = [
    # Tasks
    "Task",
    "TaskDraft",
    "Priority",
    "Category",
    "is_valid_task",
    "parse_due_date",
    "task_from_record",
    "validate_draft",
    # Views
    "View",
    "build_view",
    "due_offset",
    "is_overdue",
    "priority_rank",
    "sort_by_due_then_priority",
    "filter_today",
    "filter_upcoming",
    "filter_completed",
    "all_tasks",
    # Events
    "ChangeKind",
    "TaskEvent",
    # Misc
    "Result",
    "default_tasks",
    "TaskStats",
    "summarize",
]
