"""Structural Rules — pure boolean queries over a predicate tree.

Invariants:
    - All functions are PURE: no IO, no side effects, never raise on a well-formed tree
    - Node identity (`is`), never equality, decides membership
    - Removal excludes the candidate's whole subtree

Design Decisions:
    - Iterative pre-order walk with an explicit stack: deep trees do not hit
      the recursion limit
    - Variant checks injected as callables: the rules work on any node
      implementation that exposes `predicates` on its compound variant
"""

from typing import Callable, Iterator

from predicate_core.core.domain_types import (
    Predicate,
    is_comparison_predicate,
    is_compound_predicate,
)

VariantCheck = Callable[[object], bool]


def iter_predicates(
    root: Predicate,
    is_compound: VariantCheck = is_compound_predicate,
    exclude: Predicate | None = None,
) -> Iterator[Predicate]:
    """Yield every node reachable from root in pre-order, skipping `exclude`'s subtree."""
    stack = [root]
    while stack:
        node = stack.pop()
        if exclude is not None and node is exclude:
            continue
        yield node
        if is_compound(node):
            stack.extend(reversed(node.predicates))


def find_parent(
    root: Predicate,
    predicate: Predicate,
    is_compound: VariantCheck = is_compound_predicate,
) -> Predicate | None:
    """Return the compound directly holding `predicate`, or None (root or absent)."""
    for node in iter_predicates(root, is_compound):
        if is_compound(node) and any(child is predicate for child in node.predicates):
            return node
    return None


def contains_predicate(
    root: Predicate,
    predicate: Predicate,
    is_compound: VariantCheck = is_compound_predicate,
) -> bool:
    return any(node is predicate for node in iter_predicates(root, is_compound))


def count_comparison_predicates(
    root: Predicate,
    is_compound: VariantCheck = is_compound_predicate,
    is_comparison: VariantCheck = is_comparison_predicate,
    exclude: Predicate | None = None,
) -> int:
    return sum(
        1 for node in iter_predicates(root, is_compound, exclude)
        if is_comparison(node)
    )


def predicate_to_remove_is_root_predicate(
    root: Predicate, predicate_to_remove: Predicate,
) -> bool:
    return predicate_to_remove is root


def predicate_to_remove_is_the_last_comparison_predicate(
    root: Predicate,
    predicate_to_remove: Predicate,
    is_compound: VariantCheck = is_compound_predicate,
    is_comparison: VariantCheck = is_comparison_predicate,
) -> bool:
    """True when no comparison leaf would stay reachable from root after the removal."""
    remaining = count_comparison_predicates(
        root, is_compound, is_comparison, exclude=predicate_to_remove,
    )
    return remaining == 0
