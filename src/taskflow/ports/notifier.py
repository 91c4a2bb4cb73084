"""Notification interface."""

from typing import Protocol

from taskflow.core.events import TaskEvent


class Notifier(Protocol):
    """Receives one event per change to the task collection."""

    def notify(self, event: TaskEvent) -> None:
        ...
