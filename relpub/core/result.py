"""Result type for explicit error handling.

Every fallible operation in relpub returns ``Ok(value)`` or ``Err(error)``
instead of raising, so callers decide at each step whether a failure is
fatal, tolerated, or reported.

Usage:
    match repo.fetch("origin", "main"):
        case Ok(_):
            console.success("fetched")
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying a value."""

    value: T

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result carrying an error payload."""

    error: E

    def unwrap(self) -> None:
        """Raise ValueError containing the error."""
        raise ValueError(f"called unwrap on Err: {self.error}")

    def map(self, f: Callable[[T], U]) -> Err[E]:
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
