"""Validation Result — success-with-value or typed invariant failure.

Invariants:
    - Ok carries the value an invariant yields (possibly None)
    - Err carries exactly one InvariantViolation
    - and_then short-circuits: a check after an Err never runs

Design Decisions:
    - Values, not exceptions, inside the core: checks compose without try/except
    - unwrap() is the single point where a failure becomes an exception
      (at the service boundary)
"""

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from predicate_core.core.errors import InvariantViolation

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Invariant passed."""
    value: T = None

    @property
    def is_ok(self) -> bool:
        return True

    def and_then(self, check: "Callable[[T], Result[U]]") -> "Result[U]":
        return check(self.value)

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Invariant failed."""
    error: InvariantViolation

    @property
    def is_ok(self) -> bool:
        return False

    def and_then(self, check: Callable) -> "Err":
        return self

    def unwrap(self):
        raise self.error


Result = Union[Ok[T], Err]

