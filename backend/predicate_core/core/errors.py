"""Error Taxonomy — typed failure kinds for every predicate-tree invariant.

Invariants:
    - ErrorKind is closed: exactly one kind per invariant, one invariant per kind
    - Callers branch on `kind` (or `code`); messages are for humans only
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces a JSON-ready envelope for host applications

Design Decisions:
    - Flat tagged enumeration + single InvariantViolation class: callers only
      discriminate kinds, nothing inherits behavior per kind
    - Single hierarchy with PredicateCoreError base: hosts catch one type
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    STRUCTURE = "structure"
    VALIDATION = "validation"
    REFERENCE = "reference"


class ErrorKind(str, Enum):
    """The closed set of invariant failure kinds."""
    COMPOUND_PREDICATE_MUST_HAVE_AT_LEAST_ONE_SUB_PREDICATE = (
        "CompoundPredicateMustHaveAtLeastOneSubPredicate"
    )
    INVALID_PREDICATE_TYPE = "InvalidPredicateType"
    ROOT_PREDICATE_MUST_BE_A_COMPOUND_PREDICATE = (
        "RootPredicateMustBeACompoundPredicate"
    )
    PREDICATE_MUST_BE_A_COMPARISON_PREDICATE = (
        "PredicateMustBeAComparisonPredicate"
    )
    ADD_CURRENTLY_ONLY_SUPPORT_AFTER_INSERTION = (
        "AddCurrentlyOnlySupportAfterInsertion"
    )
    TARGET_MUST_REFER_TO_A_DEFINED_TYPE = "TargetMustReferToADefinedType"
    TARGET_ID_MUST_REFER_TO_A_DEFINED_TARGET = (
        "Target_idMustReferToADefinedTarget"
    )
    OPERATOR_ID_MUST_REFER_TO_A_DEFINED_OPERATOR = (
        "Operator_idMustReferToADefinedOperator"
    )
    FORBIDDEN_CANNOT_REMOVE_ROOT_COMPOUND_PREDICATE = (
        "ForbiddenCannotRemoveRootCompoundPredicate"
    )
    FORBIDDEN_CANNOT_REMOVE_LAST_COMPARISON_PREDICATE = (
        "ForbiddenCannotRemoveLastComparisonPredicate"
    )


_KIND_CATEGORY: dict[ErrorKind, ErrorCategory] = {
    ErrorKind.COMPOUND_PREDICATE_MUST_HAVE_AT_LEAST_ONE_SUB_PREDICATE: ErrorCategory.STRUCTURE,
    ErrorKind.INVALID_PREDICATE_TYPE: ErrorCategory.VALIDATION,
    ErrorKind.ROOT_PREDICATE_MUST_BE_A_COMPOUND_PREDICATE: ErrorCategory.STRUCTURE,
    ErrorKind.PREDICATE_MUST_BE_A_COMPARISON_PREDICATE: ErrorCategory.STRUCTURE,
    ErrorKind.ADD_CURRENTLY_ONLY_SUPPORT_AFTER_INSERTION: ErrorCategory.VALIDATION,
    ErrorKind.TARGET_MUST_REFER_TO_A_DEFINED_TYPE: ErrorCategory.REFERENCE,
    ErrorKind.TARGET_ID_MUST_REFER_TO_A_DEFINED_TARGET: ErrorCategory.REFERENCE,
    ErrorKind.OPERATOR_ID_MUST_REFER_TO_A_DEFINED_OPERATOR: ErrorCategory.REFERENCE,
    ErrorKind.FORBIDDEN_CANNOT_REMOVE_ROOT_COMPOUND_PREDICATE: ErrorCategory.STRUCTURE,
    ErrorKind.FORBIDDEN_CANNOT_REMOVE_LAST_COMPARISON_PREDICATE: ErrorCategory.STRUCTURE,
}


@dataclass
class ErrorContext:
    """Context attached to an error for observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class PredicateCoreError(Exception):
    """Base exception for all predicate-core errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to standardized error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                },
            }
        }


# ─── Invariant Failures ─────────────────────────────────────────

class InvariantViolation(PredicateCoreError):
    """A mutation was rejected by one invariant."""
    def __init__(
        self, kind: ErrorKind, message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or kind.value, kind.value, _KIND_CATEGORY[kind],
            ErrorSeverity.ERROR, context,
        )
        self.kind = kind
        self.detail = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvariantViolation):
            return NotImplemented
        return self.kind == other.kind and self.detail == other.detail

    def __hash__(self) -> int:
        return hash((self.kind, self.detail))

    def __repr__(self) -> str:
        return f"InvariantViolation({self.kind.value!r}, {self.detail!r})"


# ─── Editor Errors ──────────────────────────────────────────────

class PredicateNotFoundError(PredicateCoreError):
    """A node passed to the editor is not part of its tree."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Predicate is not part of this tree",
            "PREDICATE_NOT_FOUND", ErrorCategory.STRUCTURE,
            ErrorSeverity.ERROR, context,
        )


class UnsupportedMutationError(PredicateCoreError):
    """Mutation does not apply to this predicate variant."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNSUPPORTED_MUTATION", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
