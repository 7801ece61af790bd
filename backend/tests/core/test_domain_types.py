"""Domain Types — verifies predicate nodes, reference records, enums.

Tests:
    - Predicate nodes compare by identity
    - Variant checks discriminate the two node kinds
    - PREDICATE_TYPES maps tags to node classes
    - Enums compare equal to their raw tags
"""

import dataclasses

import pytest

from predicate_core.core.domain_types import (
    PREDICATE_TYPES,
    ComparisonPredicate,
    CompoundPredicate,
    InsertionMode,
    Logic,
    Operator,
    Target,
    Type,
    is_comparison_predicate,
    is_compound_predicate,
)

TARGET = Target(target_id="price", label="Price", type_id="number")
OPERATOR = Operator(operator_id="lt", label="is lower than")


def test_comparison_type_id_comes_from_target():
    leaf = ComparisonPredicate(target=TARGET, operator=OPERATOR)
    assert leaf.type_id == "number"
    assert leaf.argument is None


def test_nodes_compare_by_identity():
    first = ComparisonPredicate(target=TARGET, operator=OPERATOR, argument=3)
    second = ComparisonPredicate(target=TARGET, operator=OPERATOR, argument=3)
    assert first != second
    assert first == first


def test_variant_checks():
    leaf = ComparisonPredicate(target=TARGET, operator=OPERATOR)
    group = CompoundPredicate(logic=Logic.AND, predicates=[leaf])
    assert is_compound_predicate(group) and not is_compound_predicate(leaf)
    assert is_comparison_predicate(leaf) and not is_comparison_predicate(group)
    assert not is_comparison_predicate({"predicate_type": "ComparisonPredicate"})


def test_predicate_types_mapping():
    assert PREDICATE_TYPES == {
        "CompoundPredicate": CompoundPredicate,
        "ComparisonPredicate": ComparisonPredicate,
    }


def test_reference_records_are_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        TARGET.type_id = "string"
    assert Type(type_id="number") == Type(type_id="number", operator_ids=())


def test_enums_match_raw_tags():
    assert InsertionMode.AFTER == "after"
    assert Logic("or") is Logic.OR
    assert set(Logic) == {Logic.AND, Logic.OR}
