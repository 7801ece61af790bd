"""Service test fixtures — reference tables and a fresh editor per test.

Invariants:
    - Every test gets its own tree (no shared mutable nodes)
    - Settings passed explicitly: tests never depend on the process environment
"""

import pytest

from predicate_core.config import Settings
from predicate_core.schemas.reference import ReferenceTables
from predicate_core.services.edit_predicate_tree import PredicateTreeEditor


@pytest.fixture
def tables() -> ReferenceTables:
    return ReferenceTables.model_validate({
        "types": [
            {"type_id": "number", "operator_ids": ["gt", "lt"]},
            {"type_id": "string", "operator_ids": ["equals", "contains"]},
            {"type_id": "boolean", "operator_ids": []},
        ],
        "targets": [
            {"target_id": "age", "label": "Age", "type_id": "number"},
            {"target_id": "name", "label": "Name", "type_id": "string"},
            {"target_id": "orphan", "label": "Orphan", "type_id": "undefined"},
            {"target_id": "active", "label": "Active", "type_id": "boolean"},
        ],
        "operators": [
            {"operator_id": "gt", "label": "is greater than"},
            {"operator_id": "lt", "label": "is lower than"},
            {"operator_id": "equals", "label": "equals"},
            {"operator_id": "contains", "label": "contains"},
        ],
    })


@pytest.fixture
def settings() -> Settings:
    return Settings(log_rejections=True, _env_file=None)


@pytest.fixture
def editor(tables, settings) -> PredicateTreeEditor:
    return PredicateTreeEditor(tables, settings=settings)
