"""RFC 7807 Problem Details for both error-handling disciplines.

`problem_from_error` renders a failed result's `Error`; `problem_from_exception`
renders a raised exception. Both pick status, title and `type` from the error
category, so the same failure yields the same response whichever discipline
produced it. Unknown exceptions become a generic 500 that does not leak their
message.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from twotrack.domain.errors import DEFAULT_PROBLEM_TYPE_BASE, DomainError
from twotrack.domain.results import CompositeError, Error, ErrorType, FieldValidationError
from twotrack.domain.value_objects import Money

logger = logging.getLogger(__name__)

INTERNAL_ERROR_CODE = "INTERNAL_ERROR"

# Keys owned by the problem document; metadata may not overwrite them.
_RESERVED = frozenset(
    {"type", "title", "status", "detail", "instance", "errorCode", "errorType",
     "traceId", "timestamp", "errors"}
)  # fmt: skip


def to_jsonable(value: Any) -> Any:
    """Convert domain values found in metadata into JSON-friendly ones."""
    match value:
        case Money():
            return value.to_dict()
        case Decimal():
            return str(value)
        case Enum():
            return value.value
        case datetime():
            return value.isoformat()
        case Mapping():
            return {str(k): to_jsonable(v) for k, v in value.items()}
        case list() | tuple() | set() | frozenset():
            return [to_jsonable(v) for v in value]
        case _:
            return value


def _base(
    category: ErrorType,
    detail: str,
    code: str,
    instance: str | None,
    trace_id: str | None,
    type_base: str,
) -> dict[str, Any]:
    return {
        "type": f"{type_base.rstrip('/')}/{category.slug}",
        "title": category.title,
        "status": category.http_status,
        "detail": detail,
        "instance": instance,
        "errorCode": code,
        "errorType": category.value,
        "traceId": trace_id or str(uuid.uuid4()),
        "timestamp": datetime.now(UTC).isoformat(),
    }


def _merge(problem: dict[str, Any], extra: Mapping[str, Any]) -> None:
    for key, value in extra.items():
        if key not in _RESERVED:
            problem[key] = to_jsonable(value)


def _field_of(error: Error) -> str:
    if isinstance(error, FieldValidationError):
        return error.field
    return str(error.metadata.get("field", ""))


def _field_errors(errors: Iterable[Error]) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for error in errors:
        grouped.setdefault(_field_of(error), []).append(error.message)
    return grouped


def problem_from_error(
    error: Error,
    instance: str | None = None,
    trace_id: str | None = None,
    type_base: str = DEFAULT_PROBLEM_TYPE_BASE,
) -> dict[str, Any]:
    """Render an `Error` value as a Problem Details document.

    Field-level validation failures are grouped under `errors` as a map of
    field name to messages. Any other composite lists its children there.
    """
    problem = _base(error.type, error.message, error.code, instance, trace_id, type_base)
    _merge(problem, error.metadata)
    match error:
        case CompositeError() if error.type is ErrorType.VALIDATION:
            problem["errors"] = _field_errors(error.errors)
        case CompositeError():
            problem["errors"] = [
                {
                    "code": child.code,
                    "message": child.message,
                    "type": child.type.value,
                    **{k: to_jsonable(v) for k, v in child.metadata.items()},
                }
                for child in error.errors
            ]
        case FieldValidationError():
            problem["errors"] = _field_errors([error])
    return problem


def problem_from_exception(
    exc: BaseException,
    instance: str | None = None,
    trace_id: str | None = None,
    type_base: str = DEFAULT_PROBLEM_TYPE_BASE,
) -> dict[str, Any]:
    """Render a raised exception as a Problem Details document."""
    if not isinstance(exc, DomainError):
        logger.error("Unhandled exception", exc_info=exc)
        return _base(
            ErrorType.CRITICAL,
            "An unexpected error occurred.",
            INTERNAL_ERROR_CODE,
            instance,
            trace_id,
            type_base,
        ) | {"title": "Internal Server Error"}

    problem = _base(exc.category, exc.detail, exc.code, instance, trace_id, type_base)
    problem["correlationId"] = exc.correlation_id
    if exc.user_id is not None:
        problem["userId"] = exc.user_id
    if exc.tenant_id is not None:
        problem["tenantId"] = exc.tenant_id
    _merge(problem, exc.extensions)
    if exc.validation_errors:
        errors: dict[str, list[str]] = {}
        for issue in exc.validation_errors:
            errors.setdefault(issue.field, []).append(issue.message)
        problem["errors"] = errors
    elif "errors" in exc.extensions:
        problem["errors"] = to_jsonable(exc.extensions["errors"])
    return problem


def status_table() -> dict[str, int]:
    """Category name to HTTP status, in the order the categories are declared."""
    return {category.value: category.http_status for category in ErrorType}
