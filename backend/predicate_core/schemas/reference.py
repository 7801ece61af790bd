"""Reference Schemas — Pydantic models for the Type/Target/Operator tables.

Invariants:
    - Ids are unique within each table (duplicate ids fail validation)
    - Lookups return Option: NOTHING for unknown ids, never None or KeyError
    - A target may name a type_id that is not defined; resolving it is the
      job of the TargetMustReferToADefinedType invariant, not of validation
    - operators_for_type keeps the declaration order of type.operator_ids

Design Decisions:
    - Pydantic at the boundary, frozen dataclasses in core: tables usually
      arrive as JSON/dicts from a host application
"""

from pydantic import BaseModel, Field, model_validator

from predicate_core.core.domain_types import Operator, Target, Type
from predicate_core.core.option import NOTHING, Option, Some


class TypeDefinition(BaseModel):
    """A data type and the operator ids allowed on it."""
    type_id: str = Field(min_length=1)
    operator_ids: list[str] = []

    def to_domain(self) -> Type:
        return Type(type_id=self.type_id, operator_ids=tuple(self.operator_ids))


class TargetDefinition(BaseModel):
    target_id: str = Field(min_length=1)
    label: str
    type_id: str

    def to_domain(self) -> Target:
        return Target(target_id=self.target_id, label=self.label, type_id=self.type_id)


class OperatorDefinition(BaseModel):
    operator_id: str = Field(min_length=1)
    label: str

    def to_domain(self) -> Operator:
        return Operator(operator_id=self.operator_id, label=self.label)


class ReferenceTables(BaseModel):
    """Complete reference data a predicate tree resolves ids against."""
    types: list[TypeDefinition] = []
    targets: list[TargetDefinition] = []
    operators: list[OperatorDefinition] = []

    @model_validator(mode="after")
    def check_unique_ids(self) -> "ReferenceTables":
        for name, ids in (
            ("type_id", [t.type_id for t in self.types]),
            ("target_id", [t.target_id for t in self.targets]),
            ("operator_id", [o.operator_id for o in self.operators]),
        ):
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            if duplicates:
                raise ValueError(f"duplicate {name}: {', '.join(duplicates)}")
        return self

    def get_type(self, type_id: str) -> Option:
        return _find(self.types, "type_id", type_id)

    def get_target(self, target_id: str) -> Option:
        return _find(self.targets, "target_id", target_id)

    def get_operator(self, operator_id: str) -> Option:
        return _find(self.operators, "operator_id", operator_id)

    def first_target(self) -> Option:
        if not self.targets:
            return NOTHING
        return Some(self.targets[0].to_domain())

    def operators_for_type(self, type_: Type) -> list[Operator]:
        """Defined operators valid for `type_`, in declared order. Unknown ids are skipped."""
        resolved = [self.get_operator(operator_id) for operator_id in type_.operator_ids]
        return [operator.value for operator in resolved if operator.is_some()]

    def get_operator_for_type(self, type_: Type, operator_id: str) -> Option:
        """Resolve `operator_id` only if it is allowed on `type_`."""
        if operator_id not in type_.operator_ids:
            return NOTHING
        return self.get_operator(operator_id)


def _find(rows: list[BaseModel], key: str, value: str) -> Option:
    """Linear lookup by id, converted to the core record."""
    for row in rows:
        if getattr(row, key) == value:
            return Some(row.to_domain())
    return NOTHING
