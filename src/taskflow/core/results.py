"""Success/failure values for operations that must not raise."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a fallible operation. Exactly one of value/error is meaningful."""

    ok: bool
    value: T | None = None
    error: str = ""

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "Result[T]":
        return cls(ok=False, error=error)

    def unwrap_or(self, default: T) -> T:
        """Value on success, default otherwise."""
        if self.ok:
            return self.value  # type: ignore[return-value]
        return default
