"""Key-value storage interface."""

from typing import Protocol


class KeyValueStorage(Protocol):
    """Interface for a durable string slot per key."""

    def get(self, key: str) -> str | None:
        """Read the value stored under key. Returns None if nothing is stored."""
        ...

    def set(self, key: str, value: str) -> None:
        """Overwrite the value under key. Raises OSError if the write fails."""
        ...
