"""Domain-layer exceptions for the raising ("strict") discipline.

Every exception carries the same payload an `Error` value does: a stable code,
a human message, a category and structured context (`extensions`). Its HTTP
status hint is derived from the category, so a raised exception and a returned
error describing the same failure map to the same response.

`exception_from_error` converts an `Error` value into the equivalent exception;
strict entity methods use it (through `unwrap_or_raise`/`raise_for_failure`) to
share a single validation path with their result-returning twins.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, ClassVar, TypeVar

from twotrack.domain.results import (
    BaseResult,
    BusinessRuleViolation,
    CompositeError,
    ConcurrencyConflict,
    Error,
    ErrorType,
    FieldValidationError,
    InvalidStateTransition,
    InvariantViolation,
    ValueResult,
)

# pylint: disable=too-many-instance-attributes,too-many-arguments

T = TypeVar("T")

DEFAULT_PROBLEM_TYPE_BASE = "https://twotrack.dev/errors"


@dataclass(frozen=True)
class FieldIssue:
    """One field-level validation problem attached to an exception."""

    field: str
    message: str
    code: str | None = None
    attempted_value: Any = None


# ============================================================================
#                           General domain errors
# ============================================================================


class DomainError(Exception):
    """Base class for domain-layer errors.

    Args:
        message: Human-readable description (the problem `detail`).
        code: Stable machine code. Defaults to the upper-cased class name.
        correlation_id: Opaque id supplied by the caller for tracing. A random
            UUID is used when none is given.
        extensions: Initial structured context.
    """

    category: ClassVar[ErrorType] = ErrorType.FAILURE

    def __init__(
        self,
        message: str,
        code: str | None = None,
        *,
        correlation_id: str | None = None,
        extensions: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.detail = message
        self.code = code or type(self).__name__.upper()
        self.timestamp = datetime.now(UTC)
        self.correlation_id = correlation_id or str(uuid.uuid4())
        self.instance = f"/errors/{self.correlation_id}"
        self.user_id: str | None = None
        self.tenant_id: str | None = None
        self.extensions: dict[str, Any] = dict(extensions or {})
        self.validation_errors: list[FieldIssue] = []

    @property
    def status(self) -> int:
        """HTTP status hint, derived from the category."""
        return self.category.http_status

    def type_uri(self, base: str = DEFAULT_PROBLEM_TYPE_BASE) -> str:
        """Problem `type` URI for this error's category."""
        return f"{base.rstrip('/')}/{self.category.slug}"

    # --- Fluent enrichment ---

    def with_user_id(self, user_id: str | None) -> DomainError:
        self.user_id = user_id
        return self

    def with_tenant_id(self, tenant_id: str | None) -> DomainError:
        self.tenant_id = tenant_id
        return self

    def with_correlation_id(self, correlation_id: str) -> DomainError:
        self.correlation_id = correlation_id
        self.instance = f"/errors/{correlation_id}"
        return self

    def with_extension(self, key: str, value: Any) -> DomainError:
        self.extensions[key] = value
        return self

    def with_validation_error(
        self,
        field: str,
        message: str,
        code: str | None = None,
        attempted_value: Any = None,
    ) -> DomainError:
        self.validation_errors.append(FieldIssue(field, message, code, attempted_value))
        return self


class ValidationError(DomainError):
    """Raised when input is malformed or missing.

    Args:
        message: Description of the problem.
        field: Offending field, if the problem concerns a single field.
        attempted_value: The rejected value, if worth reporting.
    """

    category = ErrorType.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        attempted_value: Any = None,
        correlation_id: str | None = None,
    ) -> None:
        super().__init__(message, "VALIDATION_ERROR", correlation_id=correlation_id)
        if field is not None:
            self.with_extension("field", field)
            if attempted_value is not None:
                self.with_extension("attemptedValue", attempted_value)
            self.with_validation_error(field, message, attempted_value=attempted_value)

    @classmethod
    def from_issues(
        cls,
        issues: Iterable[FieldIssue],
        message: str = "One or more validation errors occurred",
    ) -> ValidationError:
        """Build one error reporting several field problems together."""
        error = cls(message)
        error.validation_errors.extend(issues)
        return error

    @property
    def field(self) -> str | None:
        """Field of the first reported issue, if any."""
        return self.validation_errors[0].field if self.validation_errors else None

    def __str__(self) -> str:
        if len(self.validation_errors) > 1 or (
            self.validation_errors and self.validation_errors[0].message != self.detail
        ):
            issues = "; ".join(f"{i.field}: {i.message}" for i in self.validation_errors)
            return f"{self.detail} - {issues}"
        return self.detail


class NotFoundError(DomainError):
    """Raised when something referenced does not exist."""

    category = ErrorType.NOT_FOUND


class EntityNotFoundError(NotFoundError):
    """Raised when an entity cannot be found by its id."""

    def __init__(self, entity_name: str, entity_id: Any) -> None:
        super().__init__(
            f"{entity_name} with id '{entity_id}' was not found", "NOT_FOUND"
        )
        self.entity_name = entity_name
        self.entity_id = entity_id
        self.with_extension("entityName", entity_name)
        self.with_extension("entityId", entity_id)


class ConflictError(DomainError):
    """Raised when a request conflicts with the current state of a resource."""

    category = ErrorType.CONFLICT


class DuplicateEntityError(ConflictError):
    """Raised when an entity with the same unique value already exists."""

    def __init__(self, entity_type: str, duplicate_field: str, duplicate_value: Any) -> None:
        super().__init__(
            f"{entity_type} with {duplicate_field} '{duplicate_value}' already exists",
            "DUPLICATE_ENTITY",
        )
        self.entity_type = entity_type
        self.duplicate_field = duplicate_field
        self.duplicate_value = duplicate_value
        self.with_extension("entityType", entity_type)
        self.with_extension("duplicateField", duplicate_field)
        self.with_extension("duplicateValue", duplicate_value)


class ConcurrencyError(ConflictError):
    """Raised when optimistic concurrency check fails."""

    def __init__(
        self, entity_type: str, entity_id: str, expected_version: Any, actual_version: Any
    ) -> None:
        super().__init__(
            f"Concurrency conflict on {entity_type} '{entity_id}'. "
            f"Expected version: {expected_version}, Actual: {actual_version}",
            "CONCURRENCY_CONFLICT",
        )
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        self.with_extension("entityType", entity_type)
        self.with_extension("entityId", entity_id)
        self.with_extension("expectedVersion", expected_version)
        self.with_extension("actualVersion", actual_version)


class OptimisticLockError(ConcurrencyError):
    """Version-counter flavour of `ConcurrencyError`."""

    def __init__(
        self, entity_type: str, entity_id: str, expected_version: int, actual_version: int
    ) -> None:
        super().__init__(entity_type, entity_id, expected_version, actual_version)


class UnauthorizedError(DomainError):
    """Raised when credentials are missing or invalid."""

    category = ErrorType.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized", code: str = "UNAUTHORIZED") -> None:
        super().__init__(message, code)


class ForbiddenError(DomainError):
    """Raised when the caller is known but not allowed."""

    category = ErrorType.FORBIDDEN

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN") -> None:
        super().__init__(message, code)


class CriticalError(DomainError):
    """Raised for unexpected, infrastructure-level failures."""

    category = ErrorType.CRITICAL


# ============================================================================
#                     Business rule and lifecycle errors
# ============================================================================


class BusinessRuleError(DomainError):
    """Raised when a named business rule is violated."""

    def __init__(self, rule_name: str, message: str) -> None:
        super().__init__(message, f"BUSINESS_RULE_{rule_name.upper()}")
        self.rule_name = rule_name
        self.with_extension("ruleName", rule_name)


class InvariantViolationError(DomainError):
    """Raised when a value would break an invariant of the model."""

    def __init__(
        self,
        invariant_name: str,
        message: str,
        current_value: Any = None,
        expected_value: Any = None,
    ) -> None:
        super().__init__(message, f"INVARIANT_{invariant_name.upper()}")
        self.invariant_name = invariant_name
        self.current_value = current_value
        self.expected_value = expected_value
        self.with_extension("invariantName", invariant_name)
        if current_value is not None:
            self.with_extension("currentValue", current_value)
        if expected_value is not None:
            self.with_extension("expectedValue", expected_value)


class InvalidStateTransitionError(DomainError):
    """Raised when an entity is in an invalid state for the attempted action."""

    def __init__(self, from_state: str, to_state: str, entity_type: str | None = None) -> None:
        suffix = f" for {entity_type}" if entity_type is not None else ""
        super().__init__(
            f"Cannot transition from '{from_state}' to '{to_state}'{suffix}",
            "INVALID_STATE_TRANSITION",
        )
        self.from_state = from_state
        self.to_state = to_state
        self.entity_type = entity_type or ""
        self.with_extension("fromState", from_state)
        self.with_extension("toState", to_state)
        if entity_type is not None:
            self.with_extension("entityType", entity_type)


# ============================================================================
#                      Error value -> exception bridge
# ============================================================================

_CATEGORY_EXCEPTIONS: dict[ErrorType, type[DomainError]] = {
    ErrorType.FAILURE: DomainError,
    ErrorType.NOT_FOUND: NotFoundError,
    ErrorType.CONFLICT: ConflictError,
    ErrorType.CRITICAL: CriticalError,
}


def exception_from_error(error: Error) -> DomainError:
    """Build the exception equivalent to an `Error` value.

    Code, category and metadata are preserved; metadata entries become
    `extensions`.
    """
    exc: DomainError
    match error:
        case CompositeError() if error.type is ErrorType.VALIDATION:
            exc = ValidationError.from_issues(
                (_issue_of(child) for child in error.errors), error.message
            )
            exc.code = error.code
        case CompositeError():
            exc = DomainError(error.message, error.code)
            exc.with_extension(
                "errors",
                [
                    {
                        "code": child.code,
                        "message": child.message,
                        "type": child.type.value,
                        **child.metadata,
                    }
                    for child in error.errors
                ],
            )
        case FieldValidationError():
            exc = ValidationError(
                error.message, field=error.field, attempted_value=error.attempted_value
            )
        case BusinessRuleViolation():
            exc = BusinessRuleError(error.rule_name, error.message)
        case InvariantViolation():
            exc = InvariantViolationError(
                error.invariant_name,
                error.message,
                error.current_value,
                error.expected_value,
            )
        case InvalidStateTransition():
            exc = InvalidStateTransitionError(
                error.from_state, error.to_state, error.entity_type
            )
        case ConcurrencyConflict():
            exc = OptimisticLockError(
                error.entity_type,
                error.entity_id,
                error.expected_version,
                error.actual_version,
            )
        case Error(type=ErrorType.NOT_FOUND) if "entityName" in error.metadata:
            exc = EntityNotFoundError(
                error.metadata["entityName"], error.metadata.get("entityId")
            )
        case Error(type=ErrorType.VALIDATION):
            exc = ValidationError(error.message)
            exc.code = error.code
        case Error(type=ErrorType.UNAUTHORIZED):
            exc = UnauthorizedError(error.message, error.code)
        case Error(type=ErrorType.FORBIDDEN):
            exc = ForbiddenError(error.message, error.code)
        case _:
            exc = _CATEGORY_EXCEPTIONS[error.type](error.message, error.code)

    for key, value in error.metadata.items():
        exc.extensions.setdefault(key, value)
    return exc


def _issue_of(error: Error) -> FieldIssue:
    if isinstance(error, FieldValidationError):
        return FieldIssue(error.field, error.message, error.code, error.attempted_value)
    return FieldIssue(str(error.metadata.get("field", "")), error.message, error.code)


def unwrap_or_raise(result: ValueResult[T]) -> T:
    """Return the success value or raise the exception equivalent to the error."""
    if result.is_failure:
        raise exception_from_error(result.error)
    return result.value


def raise_for_failure(result: BaseResult) -> None:
    """Raise the exception equivalent to a failed result's error, if any."""
    if result.is_failure:
        raise exception_from_error(result.error)
