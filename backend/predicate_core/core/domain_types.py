"""Domain Types — predicate tree nodes and the reference records they point to.

Invariants:
    - Predicate is a closed tagged union: CompoundPredicate | ComparisonPredicate
    - Nodes compare by identity (eq=False): two structurally equal leaves are
      still two different nodes in the tree
    - Type, Target, Operator are immutable reference records
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - Dataclasses over a behavior hierarchy: invariants only discriminate
      variants, they never call variant methods
    - str Enums: compare equal to their raw tag ("and", "after")
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union


# ─── Enums ───────────────────────────────────────────────────────

class Logic(str, Enum):
    """Boolean combinator of a CompoundPredicate."""
    AND = "and"
    OR = "or"


class InsertionMode(str, Enum):
    """Where `add` places a new predicate relative to `where`."""
    AFTER = "after"


# ─── Reference Records ───────────────────────────────────────────

@dataclass(frozen=True)
class Type:
    """A data type and the operators valid for it."""
    type_id: str
    operator_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class Target:
    """A comparable field; its type_id may not resolve."""
    target_id: str
    label: str
    type_id: str


@dataclass(frozen=True)
class Operator:
    operator_id: str
    label: str


# ─── Predicate Nodes ─────────────────────────────────────────────

@dataclass(eq=False)
class ComparisonPredicate:
    """Leaf: compares `target` against `argument` through `operator`."""
    predicate_type: ClassVar[str] = "ComparisonPredicate"

    target: Target
    operator: Operator
    argument: Any = None

    @property
    def type_id(self) -> str:
        return self.target.type_id


@dataclass(eq=False)
class CompoundPredicate:
    """Boolean group over one or more child predicates."""
    predicate_type: ClassVar[str] = "CompoundPredicate"

    logic: Logic
    predicates: list["Predicate"] = field(default_factory=list)


Predicate = Union[CompoundPredicate, ComparisonPredicate]

PREDICATE_TYPES: dict[str, type] = {
    CompoundPredicate.predicate_type: CompoundPredicate,
    ComparisonPredicate.predicate_type: ComparisonPredicate,
}


def is_compound_predicate(value: object) -> bool:
    return isinstance(value, CompoundPredicate)


def is_comparison_predicate(value: object) -> bool:
    return isinstance(value, ComparisonPredicate)
