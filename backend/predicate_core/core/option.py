"""Option — explicit presence tag for reference lookups.

Invariants:
    - Some(value) is present for every value, including None, 0, "" and False
    - NOTHING is the only absent value; is_none() never inspects the payload

Design Decisions:
    - Frozen dataclasses over Optional[T]: "present but falsy" must stay
      distinguishable from "absent"
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Some(Generic[T]):
    """A present value."""
    value: T

    def is_none(self) -> bool:
        return False

    def is_some(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Nothing:
    """The absent value."""

    def is_none(self) -> bool:
        return True

    def is_some(self) -> bool:
        return False

    def unwrap(self):
        raise ValueError("called unwrap() on NOTHING")


NOTHING = Nothing()

Option = Union[Some[T], Nothing]

