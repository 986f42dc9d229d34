"""Error values carried by failed results.

An `Error` describes one failure as data: a stable machine code, a human
message, a category (`ErrorType`) and free-form metadata. Errors are returned,
never raised; the raising counterparts live in `twotrack.domain.errors`.

Equality is structural over (code, message, type). Metadata is deliberately
left out so callers can enrich an error without breaking comparisons.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

DEFAULT_CODE = "GENERAL_ERROR"
DEFAULT_MESSAGE = "An error occurred"


class ErrorType(Enum):
    """Closed set of error categories."""

    FAILURE = "Failure"
    VALIDATION = "Validation"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    UNAUTHORIZED = "Unauthorized"
    FORBIDDEN = "Forbidden"
    CRITICAL = "Critical"

    @property
    def http_status(self) -> int:
        """HTTP status code a boundary layer should answer with."""
        return _HTTP_STATUS[self]

    @property
    def title(self) -> str:
        """Short human title used for problem details."""
        return _TITLES[self]

    @property
    def slug(self) -> str:
        """URI path segment naming the category in problem `type` URIs."""
        return _SLUGS[self]


_HTTP_STATUS: dict[ErrorType, int] = {
    ErrorType.VALIDATION: 400,
    ErrorType.UNAUTHORIZED: 401,
    ErrorType.FORBIDDEN: 403,
    ErrorType.NOT_FOUND: 404,
    ErrorType.CONFLICT: 409,
    ErrorType.FAILURE: 422,
    ErrorType.CRITICAL: 500,
}

_TITLES: dict[ErrorType, str] = {
    ErrorType.VALIDATION: "Validation Error",
    ErrorType.UNAUTHORIZED: "Unauthorized",
    ErrorType.FORBIDDEN: "Forbidden",
    ErrorType.NOT_FOUND: "Resource Not Found",
    ErrorType.CONFLICT: "Conflict",
    ErrorType.FAILURE: "Business Rule Violation",
    ErrorType.CRITICAL: "Critical Error",
}

_SLUGS: dict[ErrorType, str] = {
    ErrorType.VALIDATION: "validation",
    ErrorType.UNAUTHORIZED: "unauthorized",
    ErrorType.FORBIDDEN: "forbidden",
    ErrorType.NOT_FOUND: "not-found",
    ErrorType.CONFLICT: "conflict",
    ErrorType.FAILURE: "business-rule",
    ErrorType.CRITICAL: "critical",
}


class Error:
    """A single, categorized failure.

    Args:
        code: Stable machine-readable identifier. Defaults to `GENERAL_ERROR`.
        message: Human-readable description. Defaults to a generic message.
        error_type: Category of the failure. Defaults to `ErrorType.FAILURE`.
    """

    __slots__ = ("_code", "_message", "_type", "_metadata")

    def __init__(
        self,
        code: str | None = None,
        message: str | None = None,
        error_type: ErrorType = ErrorType.FAILURE,
    ) -> None:
        self._code = code or DEFAULT_CODE
        self._message = message or DEFAULT_MESSAGE
        self._type = error_type
        self._metadata: dict[str, Any] = {}

    @property
    def code(self) -> str:
        """Stable machine-readable identifier."""
        return self._code

    @property
    def message(self) -> str:
        """Human-readable description."""
        return self._message

    @property
    def type(self) -> ErrorType:
        """Category of the failure."""
        return self._type

    @property
    def metadata(self) -> Mapping[str, Any]:
        """Read-only view over the structured metadata."""
        return MappingProxyType(self._metadata)

    def with_metadata(self, key: str, value: Any) -> Error:
        """Attach (or overwrite) one metadata entry and return `self`."""
        self._metadata[key] = value
        return self

    # --- Construction helpers ---

    @classmethod
    def not_found(cls, entity_name: str, entity_id: Any) -> Error:
        """Build a NotFound error for `entity_name` with id `entity_id`."""
        return (
            cls(
                "NOT_FOUND",
                f"{entity_name} with id '{entity_id}' was not found",
                ErrorType.NOT_FOUND,
            )
            .with_metadata("entityName", entity_name)
            .with_metadata("entityId", entity_id)
        )

    @classmethod
    def validation(cls, field_or_message: str, message: str | None = None) -> Error:
        """Build a validation error, optionally tied to a field.

        `Error.validation("bad input")` has no field; `Error.validation("email",
        "Email cannot be empty")` records `field` in the metadata.
        """
        if message is None:
            return cls("VALIDATION_ERROR", field_or_message, ErrorType.VALIDATION)
        return FieldValidationError(field_or_message, message)

    @classmethod
    def conflict(cls, message: str) -> Error:
        return cls("CONFLICT", message, ErrorType.CONFLICT)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized") -> Error:
        return cls("UNAUTHORIZED", message, ErrorType.UNAUTHORIZED)

    @classmethod
    def forbidden(cls, message: str = "Forbidden") -> Error:
        return cls("FORBIDDEN", message, ErrorType.FORBIDDEN)

    @classmethod
    def failure(cls, message: str) -> Error:
        return cls("FAILURE", message, ErrorType.FAILURE)

    @classmethod
    def critical(cls, message: str) -> Error:
        return cls("CRITICAL_ERROR", message, ErrorType.CRITICAL)

    @classmethod
    def null_value(cls, what: str) -> Error:
        """Build the error used when a required argument is missing."""
        return cls("NULL_VALUE", f"{what} cannot be null", ErrorType.VALIDATION)

    # --- Dunder ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Error):
            return NotImplemented
        return (self._code, self._message, self._type) == (
            other._code,
            other._message,
            other._type,
        )

    def __hash__(self) -> int:
        return hash((self._code, self._message, self._type))

    def __str__(self) -> str:
        return f"[{self._code}] {self._message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(code={self._code!r}, "
            f"message={self._message!r}, type={self._type.name})"
        )


# ============================================================================
#                           Specialized errors
# ============================================================================


class FieldValidationError(Error):
    """Validation failure tied to a single input field."""

    __slots__ = ("field", "attempted_value")

    def __init__(self, field: str, message: str, attempted_value: Any = None) -> None:
        super().__init__("VALIDATION_ERROR", message, ErrorType.VALIDATION)
        self.field = field
        self.attempted_value = attempted_value
        self.with_metadata("field", field)
        if attempted_value is not None:
            self.with_metadata("attemptedValue", attempted_value)


class BusinessRuleViolation(Error):
    """A named business rule was violated."""

    __slots__ = ("rule_name",)

    def __init__(self, rule_name: str, message: str) -> None:
        super().__init__(
            f"BUSINESS_RULE_{rule_name.upper()}", message, ErrorType.FAILURE
        )
        self.rule_name = rule_name
        self.with_metadata("ruleName", rule_name)


class InvariantViolation(Error):
    """A value would break an invariant of the domain model."""

    __slots__ = ("invariant_name", "current_value", "expected_value")

    def __init__(
        self,
        invariant_name: str,
        message: str,
        current_value: Any = None,
        expected_value: Any = None,
    ) -> None:
        super().__init__(
            f"INVARIANT_{invariant_name.upper()}", message, ErrorType.FAILURE
        )
        self.invariant_name = invariant_name
        self.current_value = current_value
        self.expected_value = expected_value
        self.with_metadata("invariantName", invariant_name)
        if current_value is not None:
            self.with_metadata("currentValue", current_value)
        if expected_value is not None:
            self.with_metadata("expectedValue", expected_value)


class InvalidStateTransition(Error):
    """An entity was asked to move between two states it cannot connect."""

    __slots__ = ("from_state", "to_state", "entity_type")

    def __init__(self, from_state: str, to_state: str, entity_type: str) -> None:
        super().__init__(
            "INVALID_STATE_TRANSITION",
            f"Cannot transition from '{from_state}' to '{to_state}' for {entity_type}",
            ErrorType.FAILURE,
        )
        self.from_state = from_state
        self.to_state = to_state
        self.entity_type = entity_type
        self.with_metadata("fromState", from_state)
        self.with_metadata("toState", to_state)
        self.with_metadata("entityType", entity_type)


class ConcurrencyConflict(Error):
    """A caller presented a stale version of an entity."""

    __slots__ = ("entity_type", "entity_id", "expected_version", "actual_version")

    def __init__(
        self, entity_type: str, entity_id: str, expected_version: int, actual_version: int
    ) -> None:
        super().__init__(
            "CONCURRENCY_CONFLICT",
            f"Concurrency conflict on {entity_type} '{entity_id}'. "
            f"Expected version: {expected_version}, Actual: {actual_version}",
            ErrorType.CONFLICT,
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        self.with_metadata("entityType", entity_type)
        self.with_metadata("entityId", entity_id)
        self.with_metadata("expectedVersion", expected_version)
        self.with_metadata("actualVersion", actual_version)


class CompositeError(Error):
    """Several independent failures reported together, in order.

    The category is Validation when every child is a validation error, and
    Failure otherwise.

    Raises:
        ValueError: If no child errors are given.
    """

    __slots__ = ("errors",)

    def __init__(self, *errors: Error) -> None:
        if not errors:
            raise ValueError("CompositeError requires at least one child error")
        category = (
            ErrorType.VALIDATION
            if all(e.type is ErrorType.VALIDATION for e in errors)
            else ErrorType.FAILURE
        )
        super().__init__("COMPOSITE_ERROR", "Multiple errors occurred", category)
        self.errors: tuple[Error, ...] = tuple(errors)

    def __str__(self) -> str:
        children = "; ".join(str(e) for e in self.errors)
        return f"{super().__str__()}: {children}"
