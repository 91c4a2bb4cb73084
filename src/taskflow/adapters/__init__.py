"""Adapters - I/O implementations of ports."""

from .file_storage import FileKeyValueStorage
from .memory_storage import MemoryKeyValueStorage
from .console_notifier import ConsoleNotifier

__all__ = [
    "FileKeyValueStorage",
    "MemoryKeyValueStorage",
    "ConsoleNotifier",
]
