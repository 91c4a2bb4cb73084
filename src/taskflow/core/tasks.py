"""Pure task domain logic - no I/O dependencies."""

from dataclasses import asdict, dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from .results import Result

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


class Priority(str, Enum):
    """Task priority, highest first."""

    URGENT = "URGENT"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class Category(str, Enum):
    """Closed set of task categories."""

    PERSONAL = "PERSONAL"
    WORK = "WORK"
    SHOPPING = "SHOPPING"
    HEALTH = "HEALTH"
    EDUCATION = "EDUCATION"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Task:
    """
    A single to-do item.

    Dates are kept as the ISO-8601 strings they are stored as; parsing happens
    in the derivation functions so a bad value never prevents loading.
    """

    id: str
    title: str
    due_date: str
    category: Category | str
    priority: Priority | str
    description: str = ""
    completed: bool = False
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted record shape."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "dueDate": self.due_date,
            "category": plain_value(self.category),
            "priority": plain_value(self.priority),
            "completed": self.completed,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from a persisted record. Raises KeyError on missing fields."""
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description") or "",
            due_date=data["dueDate"],
            category=_coerce(Category, data["category"]),
            priority=_coerce(Priority, data["priority"]),
            completed=data["completed"],
            created_at=data.get("createdAt") or "",
        )


@dataclass(frozen=True)
class TaskDraft:
    """Fields supplied by the caller when creating a task."""

    title: str
    due_date: str
    category: Category | str = Category.PERSONAL
    priority: Priority | str = Priority.MEDIUM
    description: str = ""

    def to_task(self, task_id: str, created_at: str) -> Task:
        return Task(id=task_id, created_at=created_at, completed=False, **asdict(self))


def plain_value(value: Enum | str) -> str:
    return value.value if isinstance(value, Enum) else value


def _coerce(enum_cls: type[Enum], raw: Any) -> Any:
    """Map a raw string onto an enum member, keeping unknown values as-is."""
    try:
        return enum_cls(raw)
    except ValueError:
        return raw


def parse_due_date(value: Any) -> Result[date]:
    """
    Parse an ISO-8601 date or timestamp into a local calendar date.

    Aware timestamps are converted to local time first; naive ones are
    taken as local already.
    """
    if not isinstance(value, str) or not value.strip():
        return Result.failure("missing due date")
    try:
        parsed = datetime.fromisoformat(value.strip())
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone()
    except (ValueError, OverflowError, OSError) as e:
        return Result.failure(f"invalid due date {value!r}: {e}")
    return Result.success(parsed.date())


def is_valid_task(candidate: Any) -> bool:
    """True if candidate is a Task whose required fields have the right types."""
    if not isinstance(candidate, Task):
        return False
    return (
        isinstance(candidate.id, str)
        and bool(candidate.id)
        and isinstance(candidate.title, str)
        and isinstance(candidate.description, str)
        and isinstance(candidate.due_date, str)
        and isinstance(candidate.category, str)
        and isinstance(candidate.priority, str)
        and isinstance(candidate.completed, bool)
        and isinstance(candidate.created_at, str)
    )


def task_from_record(record: Any) -> Result[Task]:
    """Build a Task from a decoded JSON record, checking it on the way."""
    if not isinstance(record, dict):
        return Result.failure(f"record is not an object: {record!r}")
    try:
        task = Task.from_dict(record)
    except KeyError as e:
        return Result.failure(f"record missing field {e}")
    if not is_valid_task(task):
        return Result.failure(f"record has wrong-typed fields: id={record.get('id')!r}")
    return Result.success(task)


def validate_draft(draft: TaskDraft) -> list[str]:
    """
    Check caller-supplied fields before they reach the store.

    Returns a list of problems; empty means the draft is acceptable.
    """
    problems = []
    title = draft.title.strip() if isinstance(draft.title, str) else ""
    if not title:
        problems.append("Title is required")
    elif len(draft.title) > TITLE_MAX_LENGTH:
        problems.append(f"Title must be less than {TITLE_MAX_LENGTH} characters")

    if len(draft.description or "") > DESCRIPTION_MAX_LENGTH:
        problems.append(f"Description must be less than {DESCRIPTION_MAX_LENGTH} characters")

    if not parse_due_date(draft.due_date).ok:
        problems.append("Due date is required")

    if plain_value(draft.category) not in {c.value for c in Category}:
        problems.append(f"Unknown category: {draft.category}")
    if plain_value(draft.priority) not in {p.value for p in Priority}:
        problems.append(f"Unknown priority: {draft.priority}")
    return problems
