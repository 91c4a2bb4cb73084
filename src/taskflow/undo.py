"""Undo buffer - keeps the most recently deleted task restorable for a short window."""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from .core.tasks import Task

logger = logging.getLogger(__name__)

DEFAULT_UNDO_SECONDS = 3.0


@dataclass
class PendingUndo:
    """Handle returned from a delete: the removed task and a way to put it back."""

    removed: Task
    _buffer: "UndoBuffer" = field(repr=False)
    _restore_fn: Callable[[Task], bool] = field(repr=False)
    held_at: float = 0.0

    def restore(self) -> bool:
        """Restore the removed task if this undo is still pending. Returns success."""
        return self._buffer.restore(self)


class UndoBuffer:
    """
    Holds at most one pending undo.

    A new delete replaces whatever was pending (last delete wins). The entry
    goes away on restore, on expire(), or once window_seconds have passed.
    """

    def __init__(
        self,
        window_seconds: float = DEFAULT_UNDO_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.window_seconds = window_seconds
        self.clock = clock
        self._pending: PendingUndo | None = None

    @property
    def pending(self) -> PendingUndo | None:
        """The current undo, or None if nothing is restorable."""
        if self._pending is not None and self._expired(self._pending):
            logger.debug(f"Undo for task {self._pending.removed.id} expired")
            self._pending = None
        return self._pending

    def _expired(self, entry: PendingUndo) -> bool:
        return self.clock() - entry.held_at >= self.window_seconds

    def hold(self, task: Task, restore_fn: Callable[[Task], bool]) -> PendingUndo:
        """Keep task restorable, replacing any earlier pending undo."""
        if self._pending is not None:
            logger.debug(f"Dropping undo for task {self._pending.removed.id}, superseded")
        self._pending = PendingUndo(
            removed=task,
            _buffer=self,
            _restore_fn=restore_fn,
            held_at=self.clock(),
        )
        return self._pending

    def expire(self) -> None:
        """Discard the pending undo; the deletion becomes permanent."""
        self._pending = None

    def restore(self, entry: PendingUndo) -> bool:
        if self.pending is not entry:
            logger.warning(f"Undo for task {entry.removed.id} is no longer available")
            return False
        if not entry._restore_fn(entry.removed):
            return False
        self._pending = None
        return True
