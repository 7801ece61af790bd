"""Services Layer — the tree editor, the only code that mutates a predicate tree.

Invariants:
    - Every mutation is gated by core.invariants before it is applied
"""
