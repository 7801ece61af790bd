"""Predicate Tree Editor — the only place a predicate tree is mutated.

Invariants:
    - Every mutation runs its invariants in documented order BEFORE touching the tree
    - First failing invariant aborts the mutation: the tree is left unchanged
    - Root is always a CompoundPredicate; no CompoundPredicate is ever left empty
    - At least one ComparisonPredicate stays reachable from root
    - Nodes passed in must belong to this tree (identity), else PredicateNotFoundError

Design Decisions:
    - Functional core / imperative shell: core.invariants decide, this class mutates
    - Failures surface as the InvariantViolation carried by the Err (Result.unwrap),
      logged once here with the failing kind as error_code
    - New comparisons default to the first target and its type's first operator
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from predicate_core.config import Settings, get_settings
from predicate_core.core import rules
from predicate_core.core.domain_types import (
    PREDICATE_TYPES,
    ComparisonPredicate,
    CompoundPredicate,
    InsertionMode,
    Logic,
    Predicate,
    Type,
    is_comparison_predicate,
    is_compound_predicate,
)
from predicate_core.core.errors import (
    ErrorContext,
    InvariantViolation,
    PredicateNotFoundError,
    UnsupportedMutationError,
)
from predicate_core.core.invariants import (
    operator_id_must_refer_to_a_defined_operator,
    predicate_must_be_a_comparison_predicate,
    root_predicate_must_be_a_compound_predicate,
    target_id_must_refer_to_a_defined_target,
    target_must_refer_to_a_defined_type,
    validate_addition,
    validate_creation,
    validate_removal,
)
from predicate_core.core.option import NOTHING, Option, Some
from predicate_core.core.result import Err, Result
from predicate_core.schemas.reference import ReferenceTables

logger = logging.getLogger(__name__)


class PredicateTreeEditor:
    """Owns one predicate tree and gates every change through core.invariants."""

    def __init__(
        self,
        tables: ReferenceTables,
        root: Any = None,
        accepted_types: Mapping[str, type] = PREDICATE_TYPES,
        settings: Settings | None = None,
    ):
        self.tables = tables
        self.accepted_types = accepted_types
        self.log_rejections = (settings or get_settings()).log_rejections
        if root is None:
            root = self.create_compound([self.create_comparison()])
        self.root: CompoundPredicate = self._enforce(
            "set_root", root_predicate_must_be_a_compound_predicate(root),
        )
        # A finite tree whose groups are all non-empty always ends in a comparison leaf
        for node in rules.iter_predicates(self.root):
            if is_compound_predicate(node):
                self._enforce("set_root", validate_creation(node.predicates))

    # ─── Factories ───────────────────────────────────────────────

    def create_compound(
        self, predicates: Sequence[Predicate], logic: Logic = Logic.AND,
    ) -> CompoundPredicate:
        """Build a detached CompoundPredicate over at least one child."""
        self._enforce("create_compound", validate_creation(predicates))
        return CompoundPredicate(logic=Logic(logic), predicates=list(predicates))

    def create_comparison(self, target_id: str | None = None) -> ComparisonPredicate:
        """Build a detached leaf on `target_id` (or the first target) with its default operator."""
        target_option = (
            self.tables.first_target() if target_id is None
            else self.tables.get_target(target_id)
        )
        target = self._enforce(
            "create_comparison",
            target_id_must_refer_to_a_defined_target(target_option),
            target_id=target_id,
        )
        type_ = self._enforce(
            "create_comparison",
            target_must_refer_to_a_defined_type(self.tables.get_type(target.type_id), target),
            target_id=target.target_id,
        )
        operator = self._enforce(
            "create_comparison",
            operator_id_must_refer_to_a_defined_operator(self._default_operator(type_)),
            target_id=target.target_id,
        )
        return ComparisonPredicate(target=target, operator=operator)

    # ─── Mutations ───────────────────────────────────────────────

    def add(
        self,
        where: Predicate,
        how: str = InsertionMode.AFTER,
        predicate_type: str = ComparisonPredicate.predicate_type,
    ) -> Predicate:
        """Insert a new default predicate after `where`.

        When `where` is a CompoundPredicate the new node becomes its first child,
        otherwise it lands right after `where` inside the same parent.
        """
        self._require_member("add", where)
        self._enforce(
            "add", validate_addition(how, predicate_type, self.accepted_types),
            insertion_mode=how, predicate_type=predicate_type,
        )

        new_predicate: Predicate = self.create_comparison()
        if _builds_compound(self.accepted_types[predicate_type]):
            new_predicate = self.create_compound([new_predicate])

        if is_compound_predicate(where):
            where.predicates.insert(0, new_predicate)
        else:
            parent = rules.find_parent(self.root, where)
            parent.predicates.insert(_index_of(parent, where) + 1, new_predicate)

        logger.debug(
            f"Added {new_predicate.predicate_type}",
            extra={"operation": "add", "predicate_type": new_predicate.predicate_type},
        )
        return new_predicate

    def remove(self, predicate: Predicate) -> Predicate:
        """Detach `predicate`; parents left empty are detached too (never the root)."""
        self._require_member("remove", predicate)
        self._enforce("remove", validate_removal(self.root, predicate))

        node = predicate
        parent = rules.find_parent(self.root, node)
        while True:
            del parent.predicates[_index_of(parent, node)]
            if parent.predicates or parent is self.root:
                break
            node, parent = parent, rules.find_parent(self.root, parent)

        logger.debug(
            f"Removed {predicate.predicate_type}",
            extra={"operation": "remove", "predicate_type": predicate.predicate_type},
        )
        return predicate

    def set_target(self, predicate: Predicate, target_id: str) -> ComparisonPredicate:
        """Rebind a leaf to `target_id`; operator resets to the new type's first, argument clears."""
        self._require_member("set_target", predicate)
        self._enforce("set_target", predicate_must_be_a_comparison_predicate(predicate))
        target = self._enforce(
            "set_target",
            target_id_must_refer_to_a_defined_target(self.tables.get_target(target_id)),
            target_id=target_id,
        )
        type_ = self._enforce(
            "set_target",
            target_must_refer_to_a_defined_type(self.tables.get_type(target.type_id), target),
            target_id=target_id,
        )
        operator = self._enforce(
            "set_target",
            operator_id_must_refer_to_a_defined_operator(self._default_operator(type_)),
            target_id=target_id,
        )

        predicate.target = target
        predicate.operator = operator
        predicate.argument = None
        return predicate

    def set_operator(self, predicate: Predicate, operator_id: str) -> ComparisonPredicate:
        """Rebind a leaf's operator; the operator must be allowed on the target's type."""
        self._require_member("set_operator", predicate)
        self._enforce("set_operator", predicate_must_be_a_comparison_predicate(predicate))
        type_ = self._enforce(
            "set_operator",
            target_must_refer_to_a_defined_type(
                self.tables.get_type(predicate.type_id), predicate.target,
            ),
            target_id=predicate.target.target_id,
        )
        predicate.operator = self._enforce(
            "set_operator",
            operator_id_must_refer_to_a_defined_operator(
                self.tables.get_operator_for_type(type_, operator_id),
            ),
            operator_id=operator_id,
        )
        return predicate

    def set_argument(self, predicate: Predicate, argument: Any) -> ComparisonPredicate:
        self._require_member("set_argument", predicate)
        self._enforce("set_argument", predicate_must_be_a_comparison_predicate(predicate))
        predicate.argument = argument
        return predicate

    def set_logic(self, predicate: Predicate, logic: Logic | str) -> CompoundPredicate:
        self._require_member("set_logic", predicate)
        if not is_compound_predicate(predicate):
            raise UnsupportedMutationError(
                "Only compound predicates carry a logic",
                ErrorContext(operation="set_logic"),
            )
        predicate.logic = Logic(logic)
        return predicate

    # ─── Queries ─────────────────────────────────────────────────

    def comparison_predicates(self) -> list[ComparisonPredicate]:
        return [
            node for node in rules.iter_predicates(self.root)
            if is_comparison_predicate(node)
        ]

    # ─── Helpers ─────────────────────────────────────────────────

    def _default_operator(self, type_: Type) -> Option:
        operators = self.tables.operators_for_type(type_)
        if not operators:
            return NOTHING
        return Some(operators[0])

    def _require_member(self, operation: str, predicate: Predicate) -> None:
        if not rules.contains_predicate(self.root, predicate):
            raise PredicateNotFoundError(ErrorContext(operation=operation))

    def _enforce(self, operation: str, result: Result, **extra: Any) -> Any:
        """Return the Ok value, or log and raise the failing invariant's error."""
        if isinstance(result, Err):
            self._reject(operation, result.error, **extra)
        return result.unwrap()

    def _reject(self, operation: str, error: InvariantViolation, **extra: Any) -> None:
        error.context.operation = operation
        if self.log_rejections:
            logger.warning(
                f"Rejected {operation}: {error.message}",
                extra={"error_code": error.code, "operation": operation, **extra},
            )
        raise error


def _builds_compound(node_class: Any) -> bool:
    return isinstance(node_class, type) and issubclass(node_class, CompoundPredicate)


def _index_of(parent: CompoundPredicate, child: Predicate) -> int:
    """Position of `child` in `parent` by identity."""
    for index, candidate in enumerate(parent.predicates):
        if candidate is child:
            return index
    raise PredicateNotFoundError()
