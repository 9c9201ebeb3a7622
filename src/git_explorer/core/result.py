from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from git_explorer.core.errors import GitExplorerError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class GitResult(Generic[T]):
    """Outcome of a fallible external call: either a value or the error that replaced it."""

    value: T | None = None
    error: GitExplorerError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> GitResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: GitExplorerError) -> GitResult[T]:
        return cls(error=error)

    def map(self, fn: Callable[[T], U]) -> GitResult[U]:
        if self.error is not None or self.value is None:
            return GitResult(error=self.error)
        return GitResult(value=fn(self.value))

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        assert self.value is not None
        return self.value

    def unwrap_or(self, default: T) -> T:
        if self.error is not None or self.value is None:
            return default
        return self.value
