"""Invariants — named precondition checks gating every predicate-tree mutation.

Invariants:
    - All functions are PURE: no IO, no side effects on the tree
    - Return Ok(value) on success, Err(InvariantViolation) on violation
    - Each check fails with exactly one ErrorKind, and no two checks share one
    - Composite validators chain checks in documented order — first error wins
    - validate_removal extends the last-leaf check to groups holding every leaf;
      the kind is still only produced here, never by the editing service

Design Decisions:
    - Result values over raised exceptions: the editing service decides when
      a failure becomes an exception (Result.unwrap)
    - Variant checks are parameters with defaults: the caller may supply its
      own node implementation
    - predicate_must_be_a_comparison_predicate uses a variant check, never a
      comparison of type tags
"""

import json
from collections.abc import Mapping
from typing import Any, Callable

from predicate_core.core import rules
from predicate_core.core.domain_types import (
    Predicate,
    Target,
    InsertionMode,
    is_comparison_predicate,
    is_compound_predicate,
)
from predicate_core.core.errors import ErrorKind, InvariantViolation
from predicate_core.core.option import Option
from predicate_core.core.result import Err, Ok, Result

VariantCheck = Callable[[object], bool]


# --- Creation -----------------------------------------------------------------

def compound_predicate_must_have_at_least_one_sub_predicate(predicates: Any) -> Result:
    """Children of a new CompoundPredicate must be a non-empty list or tuple."""
    if not isinstance(predicates, (list, tuple)) or len(predicates) == 0:
        return _error(ErrorKind.COMPOUND_PREDICATE_MUST_HAVE_AT_LEAST_ONE_SUB_PREDICATE)
    return Ok()


def predicate_type_must_be_valid(predicate_type: Any, accepted_types: Mapping) -> Result:
    # list() keeps unhashable tags a plain mismatch instead of a TypeError
    if predicate_type not in list(accepted_types):
        return _error(ErrorKind.INVALID_PREDICATE_TYPE)
    return Ok()


def root_predicate_must_be_a_compound_predicate(
    root: Any, is_compound: VariantCheck = is_compound_predicate,
) -> Result:
    if not is_compound(root):
        return _error(ErrorKind.ROOT_PREDICATE_MUST_BE_A_COMPOUND_PREDICATE)
    return Ok(root)


def predicate_must_be_a_comparison_predicate(
    predicate: Any, is_comparison: VariantCheck = is_comparison_predicate,
) -> Result:
    if not is_comparison(predicate):
        return _error(ErrorKind.PREDICATE_MUST_BE_A_COMPARISON_PREDICATE)
    return Ok()


def add_only_supports_after(how: Any) -> Result:
    if how != InsertionMode.AFTER:
        return _error(ErrorKind.ADD_CURRENTLY_ONLY_SUPPORT_AFTER_INSERTION)
    return Ok()


# --- References ---------------------------------------------------------------

def target_must_refer_to_a_defined_type(type_: Option, target: Target) -> Result:
    """The type resolved from target.type_id must exist. Yields the unwrapped Type."""
    if type_.is_none():
        return _error(
            ErrorKind.TARGET_MUST_REFER_TO_A_DEFINED_TYPE,
            f"target {json.dumps(target.target_id, ensure_ascii=False)} does not refer to a defined type, "
            f"target.type_id={json.dumps(target.type_id, ensure_ascii=False)}",
        )
    return Ok(type_.value)


def target_id_must_refer_to_a_defined_target(target: Option) -> Result:
    if target.is_none():
        return _error(ErrorKind.TARGET_ID_MUST_REFER_TO_A_DEFINED_TARGET)
    return Ok(target.value)


def operator_id_must_refer_to_a_defined_operator(operator: Option) -> Result:
    if operator.is_none():
        return _error(ErrorKind.OPERATOR_ID_MUST_REFER_TO_A_DEFINED_OPERATOR)
    return Ok(operator.value)


# --- Removal ------------------------------------------------------------------

def remove_predicate_must_differ_from_root_predicate(
    root: Predicate, predicate_to_remove: Predicate,
) -> Result:
    if rules.predicate_to_remove_is_root_predicate(root, predicate_to_remove):
        return _error(ErrorKind.FORBIDDEN_CANNOT_REMOVE_ROOT_COMPOUND_PREDICATE)
    return Ok(predicate_to_remove)


def remove_predicate_cannot_be_the_last_comparison_predicate(
    root: Predicate,
    predicate_to_remove: Predicate,
    is_compound: VariantCheck = is_compound_predicate,
    is_comparison: VariantCheck = is_comparison_predicate,
) -> Result:
    """A comparison leaf may only go if another leaf stays reachable from root."""
    if is_comparison(predicate_to_remove) and (
        rules.predicate_to_remove_is_the_last_comparison_predicate(
            root, predicate_to_remove, is_compound, is_comparison,
        )
    ):
        return _error(ErrorKind.FORBIDDEN_CANNOT_REMOVE_LAST_COMPARISON_PREDICATE)
    return Ok()


# --- Composite validators -----------------------------------------------------

def validate_creation(predicates: Any) -> Result:
    """Validate the children handed to a new CompoundPredicate."""
    return compound_predicate_must_have_at_least_one_sub_predicate(predicates)


def validate_addition(how: Any, predicate_type: Any, accepted_types: Mapping) -> Result:
    """Validate an `add` request: insertion mode, then predicate type."""
    return add_only_supports_after(how).and_then(
        lambda _: predicate_type_must_be_valid(predicate_type, accepted_types)
    )


def validate_removal(
    root: Predicate,
    predicate_to_remove: Predicate,
    is_compound: VariantCheck = is_compound_predicate,
    is_comparison: VariantCheck = is_comparison_predicate,
) -> Result:
    """Validate a `remove` request: never the root, never the last leaf,
    never a group whose subtree holds every remaining leaf."""
    return remove_predicate_must_differ_from_root_predicate(
        root, predicate_to_remove,
    ).and_then(
        lambda candidate: remove_predicate_cannot_be_the_last_comparison_predicate(
            root, candidate, is_compound, is_comparison,
        ).and_then(
            lambda _: _removal_keeps_a_comparison_predicate(
                root, candidate, is_compound, is_comparison,
            )
        )
    )


def _removal_keeps_a_comparison_predicate(
    root: Predicate,
    predicate_to_remove: Predicate,
    is_compound: VariantCheck,
    is_comparison: VariantCheck,
) -> Result:
    """Group-removal counterpart of the last-leaf invariant."""
    if is_compound(predicate_to_remove) and (
        rules.predicate_to_remove_is_the_last_comparison_predicate(
            root, predicate_to_remove, is_compound, is_comparison,
        )
    ):
        return _error(
            ErrorKind.FORBIDDEN_CANNOT_REMOVE_LAST_COMPARISON_PREDICATE,
            "removing this compound predicate would remove every comparison predicate",
        )
    return Ok()


INVARIANTS: dict[str, Callable[..., Result]] = {
    "CompoundPredicateMustHaveAtLeastOneSubPredicate":
        compound_predicate_must_have_at_least_one_sub_predicate,
    "PredicateTypeMustBeValid": predicate_type_must_be_valid,
    "RootPredicateMustBeACompoundPredicate": root_predicate_must_be_a_compound_predicate,
    "PredicateMustBeAComparisonPredicate": predicate_must_be_a_comparison_predicate,
    "AddOnlySupportsAfter": add_only_supports_after,
    "TargetMustReferToADefinedType": target_must_refer_to_a_defined_type,
    "Target_idMustReferToADefinedTarget": target_id_must_refer_to_a_defined_target,
    "Operator_idMustReferToADefinedOperator": operator_id_must_refer_to_a_defined_operator,
    "RemovePredicateMustDifferFromRootPredicate":
        remove_predicate_must_differ_from_root_predicate,
    "RemovePredicateCannotBeTheLastComparisonPredicate":
        remove_predicate_cannot_be_the_last_comparison_predicate,
}


# --- Helper -------------------------------------------------------------------

def _error(kind: ErrorKind, message: str | None = None) -> Err:
    """Construct a failed result for one invariant kind."""
    return Err(InvariantViolation(kind, message))
