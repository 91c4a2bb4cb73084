"""Ports - interfaces/protocols for external dependencies."""

from .storage import KeyValueStorage
from .notifier import Notifier

__all__ = [
    "KeyValueStorage",
    "Notifier",
]
