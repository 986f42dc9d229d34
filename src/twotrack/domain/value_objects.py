"""Module including value objects used across the domain layer.

Each value object validates itself on construction and offers two factories:
`create` raises a `DomainError` on invalid input, `try_create` returns a failed
`ValueResult` instead. Both run the same checks in the same order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import total_ordering
from typing import Any

from twotrack.domain.errors import unwrap_or_raise
from twotrack.domain.results import (
    BusinessRuleViolation,
    Error,
    FieldValidationError,
    InvariantViolation,
    ValueResult,
)

DEFAULT_CURRENCY = "USD"

VALID_CURRENCY_CODES = frozenset(
    {
        "USD", "EUR", "GBP", "JPY", "CHF", "CAD", "AUD", "NZD",
        "CNY", "INR", "KRW", "SGD", "HKD", "NOK", "SEK", "DKK",
        "PLN", "CZK", "HUF", "RON", "BGN", "HRK", "RUB", "TRY",
        "BRL", "MXN", "ARS", "CLP", "COP", "PEN", "UYU", "ZAR",
    }
)  # fmt: skip

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


# ============================================================================
#                                   Money
# ============================================================================


def _to_decimal(amount: Any) -> Decimal | None:
    if isinstance(amount, bool):
        return None
    if isinstance(amount, float):
        amount = str(amount)
    try:
        return Decimal(amount)
    except (InvalidOperation, TypeError, ValueError):
        return None


def _validate_money(amount: Any, currency: str | None) -> ValueResult[tuple[Decimal, str]]:
    value = _to_decimal(amount)
    if value is None or not value.is_finite():
        return ValueResult.failure(
            FieldValidationError("amount", "Money amount must be a number", amount)
        )
    if value < 0:
        return ValueResult.failure(
            InvariantViolation(
                "POSITIVE_AMOUNT", "Money amount cannot be negative", value, ">= 0"
            ).with_metadata("field", "amount")
        )
    if currency is None or not currency.strip():
        return ValueResult.failure(
            FieldValidationError("currency", "Currency cannot be empty")
        )
    code = currency.strip().upper()
    if code not in VALID_CURRENCY_CODES:
        return ValueResult.failure(
            FieldValidationError(
                "currency",
                f"Invalid currency code: {currency}. "
                "Must be a valid ISO 4217 code (e.g., USD, EUR, GBP).",
                currency,
            )
        )
    return ValueResult.success((value, code))


@total_ordering
@dataclass(frozen=True)
class Money:
    """A non-negative amount in one whitelisted currency.

    Arithmetic never mixes currencies and never goes below zero; both rules are
    enforced by the strict (`add`, `subtract`) and safe (`try_add`,
    `try_subtract`) forms alike.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        amount, currency = unwrap_or_raise(_validate_money(self.amount, self.currency))
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", currency)

    # --- Construction Paths ---

    @classmethod
    def create(cls, amount: Any, currency: str = DEFAULT_CURRENCY) -> Money:
        """Build a `Money`, raising on invalid input."""
        return unwrap_or_raise(cls.try_create(amount, currency))

    @classmethod
    def try_create(cls, amount: Any, currency: str = DEFAULT_CURRENCY) -> ValueResult[Money]:
        """Build a `Money`, returning a failed result on invalid input."""
        return _validate_money(amount, currency).map(lambda parts: cls(*parts))

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(Decimal(0), currency)

    # --- Arithmetic ---

    def add(self, other: Money) -> Money:
        return unwrap_or_raise(self.try_add(other))

    def try_add(self, other: Money | None) -> ValueResult[Money]:
        if other is None:
            return ValueResult.failure(Error.null_value("Money to add"))
        if other.currency != self.currency:
            return ValueResult.failure(self._currency_mismatch("add", other))
        return ValueResult.success(Money(self.amount + other.amount, self.currency))

    def subtract(self, other: Money) -> Money:
        return unwrap_or_raise(self.try_subtract(other))

    def try_subtract(self, other: Money | None) -> ValueResult[Money]:
        if other is None:
            return ValueResult.failure(Error.null_value("Money to subtract"))
        if other.currency != self.currency:
            return ValueResult.failure(self._currency_mismatch("subtract", other))
        if self.amount < other.amount:
            return ValueResult.failure(
                BusinessRuleViolation(
                    "INSUFFICIENT_FUNDS", f"Cannot subtract {other} from {self}"
                )
                .with_metadata("currentAmount", self.amount)
                .with_metadata("requestedAmount", other.amount)
            )
        return ValueResult.success(Money(self.amount - other.amount, self.currency))

    def multiply(self, factor: int | Decimal) -> Money:
        return unwrap_or_raise(self.try_multiply(factor))

    def try_multiply(self, factor: int | Decimal) -> ValueResult[Money]:
        return Money.try_create(self.amount * Decimal(factor), self.currency)

    def _currency_mismatch(self, verb: str, other: Money) -> Error:
        return (
            BusinessRuleViolation(
                "CURRENCY_MISMATCH",
                f"Cannot {verb} money with different currencies: "
                f"{self.currency} and {other.currency}",
            )
            .with_metadata("leftCurrency", self.currency)
            .with_metadata("rightCurrency", other.currency)
        )

    # --- Comparison ---

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        if other.currency != self.currency:
            raise ValueError(
                "Cannot compare money with different currencies: "
                f"{self.currency} and {other.currency}"
            )
        return self.amount < other.amount

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    def to_dict(self) -> dict[str, str]:
        """JSON-friendly representation."""
        return {"amount": f"{self.amount:.2f}", "currency": self.currency}


# ============================================================================
#                                   Email
# ============================================================================


def _validate_email(value: str | None) -> ValueResult[str]:
    if value is None or not value.strip():
        return ValueResult.failure(FieldValidationError("email", "Email cannot be empty"))
    normalized = value.strip().lower()
    if not _EMAIL_PATTERN.match(normalized):
        return ValueResult.failure(
            FieldValidationError("email", f"'{value}' is not a valid email address", value)
        )
    return ValueResult.success(normalized)


@dataclass(frozen=True)
class Email:
    """A syntactically valid e-mail address, stored lower-cased."""

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", unwrap_or_raise(_validate_email(self.value)))

    @classmethod
    def create(cls, value: str) -> Email:
        return unwrap_or_raise(cls.try_create(value))

    @classmethod
    def try_create(cls, value: str | None) -> ValueResult[Email]:
        return _validate_email(value).map(cls)

    def __str__(self) -> str:
        return self.value
