"""Core Layer — pure domain logic, no IO, no logging, no configuration.

Invariants:
    - No module in core/ imports from services/, schemas/, or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell (services/)
"""
