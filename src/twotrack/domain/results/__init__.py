"""Error values and result containers.

Re-exported here to provide a single import path for the rest of the domain.
"""

from .error import (
    BusinessRuleViolation,
    CompositeError,
    ConcurrencyConflict,
    Error,
    ErrorType,
    FieldValidationError,
    InvalidStateTransition,
    InvariantViolation,
)
from .result import BaseResult, Result, ResultMisuseError, ValueResult, bind_chain

__all__ = [
    "BaseResult",
    "BusinessRuleViolation",
    "CompositeError",
    "ConcurrencyConflict",
    "Error",
    "ErrorType",
    "FieldValidationError",
    "InvalidStateTransition",
    "InvariantViolation",
    "Result",
    "ResultMisuseError",
    "ValueResult",
    "bind_chain",
]
