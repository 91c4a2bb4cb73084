"""TaskFlow CLI - personal task tracker."""

import json
import logging
import sys
from datetime import date, datetime, time

import click

from .adapters.console_notifier import ConsoleNotifier
from .config import load_config
from .core.tasks import Category, Priority, Task, TaskDraft, plain_value
from .core.views import View, is_overdue
from .store import TaskStore
from .workflows import build_store, create_task, edit_task

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])
CATEGORY_CHOICE = click.Choice([c.value for c in Category], case_sensitive=False)
PRIORITY_CHOICE = click.Choice([p.value for p in Priority], case_sensitive=False)


def _open_store(verbose: bool = False) -> TaskStore:
    return build_store(load_config(), notifier=ConsoleNotifier(verbose=verbose))


def _due_timestamp(day: datetime) -> str:
    """Midnight local time on the given day, as an aware ISO-8601 string."""
    return datetime.combine(day.date(), time.min).astimezone().isoformat()


def _fail(problems: list[str]) -> None:
    for problem in problems:
        click.echo(f"Error: {problem}", err=True)
    sys.exit(1)


def _format_task(task: Task, as_of: date) -> str:
    check = "x" if task.completed else " "
    due = task.due_date[:10] if task.due_date else "no date"
    overdue = " OVERDUE" if is_overdue(task, as_of) else ""
    priority = plain_value(task.priority)
    category = plain_value(task.category)
    return f"[{check}] {priority:7} {due}  {task.title} ({category}){overdue}  #{task.id}"


@click.group()
@click.version_option(package_name="taskflow")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """TaskFlow - organize, prioritize, and track your tasks."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command("list")
@click.argument(
    "view",
    required=False,
    default=View.ALL.value,
    type=click.Choice([v.value for v in View], case_sensitive=False),
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--date", "-d", "target_date", type=DATE_TYPE, default=None,
              help="Date to treat as today (YYYY-MM-DD)")
def list_tasks(view: str, as_json: bool, target_date: datetime | None):
    """List tasks: all, today, upcoming or completed."""
    as_of = target_date.date() if target_date else date.today()
    store = _open_store()
    tasks = store.view(view.lower(), as_of)

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in tasks], indent=2))
        return

    if not tasks:
        click.echo(f"No {view.lower()} tasks." if view.lower() != "all" else "No tasks.")
        return

    for task in tasks:
        click.echo(_format_task(task, as_of))


@main.command()
@click.argument("title")
@click.option("--due", required=True, type=DATE_TYPE, help="Due date (YYYY-MM-DD)")
@click.option("--description", default="", help="Optional description")
@click.option("--category", type=CATEGORY_CHOICE, default=Category.PERSONAL.value)
@click.option("--priority", type=PRIORITY_CHOICE, default=Priority.MEDIUM.value)
def add(title: str, due: datetime, description: str, category: str, priority: str):
    """Add a new task."""
    store = _open_store()
    draft = TaskDraft(
        title=title,
        due_date=_due_timestamp(due),
        category=Category(category.upper()),
        priority=Priority(priority.upper()),
        description=description,
    )
    task, problems = create_task(store, draft)
    if task is None:
        _fail(problems)
    click.echo(f"  id: {task.id}")


@main.command()
@click.argument("task_id")
@click.option("--title", default=None)
@click.option("--description", default=None)
@click.option("--due", type=DATE_TYPE, default=None, help="Due date (YYYY-MM-DD)")
@click.option("--category", type=CATEGORY_CHOICE, default=None)
@click.option("--priority", type=PRIORITY_CHOICE, default=None)
def edit(
    task_id: str,
    title: str | None,
    description: str | None,
    due: datetime | None,
    category: str | None,
    priority: str | None,
):
    """Edit an existing task."""
    store = _open_store()
    _, problems = edit_task(
        store,
        task_id,
        title=title,
        description=description,
        due_date=_due_timestamp(due) if due else None,
        category=Category(category.upper()) if category else None,
        priority=Priority(priority.upper()) if priority else None,
    )
    if problems:
        _fail(problems)


@main.command()
@click.argument("task_id")
def toggle(task_id: str):
    """Mark a task complete, or reopen it."""
    store = _open_store()
    if store.toggle_complete(task_id) is None:
        _fail([f"Task not found: {task_id}"])


@main.command()
@click.argument("task_id")
@click.option("--yes", "-y", is_flag=True, help="Don't offer to undo")
def delete(task_id: str, yes: bool):
    """Delete a task (with a short undo window)."""
    store = _open_store()
    pending = store.delete(task_id)
    if pending is None:
        _fail([f"Task not found: {task_id}"])
    if yes:
        return

    if click.confirm("Undo?", default=False):
        if not pending.restore():
            click.echo("Undo window has closed; the task stays deleted.", err=True)
            sys.exit(1)
    else:
        store.undo.expire()


@main.command()
@click.option("--date", "-d", "target_date", type=DATE_TYPE, default=None,
              help="Date to treat as today (YYYY-MM-DD)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(target_date: datetime | None, as_json: bool):
    """Show task counts."""
    as_of = target_date.date() if target_date else date.today()
    summary = _open_store().stats(as_of)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "total": summary.total,
                    "completed": summary.completed,
                    "pending": summary.pending,
                    "overdue": summary.overdue,
                    "due_today": summary.due_today,
                },
                indent=2,
            )
        )
        return

    click.echo(f"Total:     {summary.total}")
    click.echo(f"Completed: {summary.completed} ({summary.completion_rate:.0%})")
    click.echo(f"Pending:   {summary.pending}")
    click.echo(f"Due today: {summary.due_today}")
    click.echo(f"Overdue:   {summary.overdue}")


if __name__ == "__main__":
    main()
