"""Pydantic Schemas — validated reference tables at the system boundary.

Invariants:
    - Schemas validate host-supplied data; core/ records are produced from them

Design Decisions:
    - Separate from core: schemas are input contracts, core types are the domain
"""
