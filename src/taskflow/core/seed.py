"""Example tasks used when nothing has been stored yet."""

from datetime import date, datetime, time, timedelta

from .tasks import Category, Priority, Task


def _at_midnight(day: date) -> str:
    return datetime.combine(day, time.min).isoformat()


def default_tasks(as_of: date) -> list[Task]:
    """
    Seed collection relative to as_of.

    Deterministic: the same as_of always gives the same ids, dates and order.
    """
    created = _at_midnight(as_of - timedelta(days=1))
    return [
        Task(
            id="seed-1",
            title="Review weekly goals",
            description="Check progress and adjust priorities for the week.",
            due_date=_at_midnight(as_of),
            category=Category.PERSONAL,
            priority=Priority.HIGH,
            created_at=created,
        ),
        Task(
            id="seed-2",
            title="Prepare project update",
            description="Summarize status and blockers for the team.",
            due_date=_at_midnight(as_of + timedelta(days=1)),
            category=Category.WORK,
            priority=Priority.URGENT,
            created_at=created,
        ),
        Task(
            id="seed-3",
            title="Buy groceries",
            description="",
            due_date=_at_midnight(as_of + timedelta(days=3)),
            category=Category.SHOPPING,
            priority=Priority.LOW,
            created_at=created,
        ),
    ]
