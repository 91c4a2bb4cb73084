"""Console notifier - prints store events to the terminal."""

import click

from taskflow.core.events import TaskEvent


class ConsoleNotifier:
    """
    Terminal notifier.

    Implements Notifier protocol. Errors go to stderr in red, everything
    else to stdout.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def notify(self, event: TaskEvent) -> None:
        line = event.title
        if event.task is not None:
            line = f"{line}: {event.task.title}"
        if event.is_error:
            click.secho(f"{line}. {event.message}", fg="red", err=True)
            return
        click.secho(line, fg="green")
        if self.verbose:
            click.echo(f"  {event.message}")
