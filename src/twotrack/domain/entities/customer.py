"""Customer entity: identity, status and a credit ledger."""

from __future__ import annotations

from enum import Enum
from typing import Any

from twotrack.domain.errors import raise_for_failure, unwrap_or_raise
from twotrack.domain.results import (
    BusinessRuleViolation,
    Error,
    FieldValidationError,
    Result,
    ValueResult,
)
from twotrack.domain.value_objects import Email, Money

from .base import Entity


class CustomerStatus(Enum):
    """Lifecycle states of a customer."""

    ACTIVE = "Active"
    SUSPENDED = "Suspended"
    CLOSED = "Closed"


class Customer(Entity):
    """A customer buying on credit.

    Available credit never exceeds the credit limit, and credit can only be
    used or restored while the customer is active.
    """

    ENTITY_TYPE = "Customer"

    def __init__(self, entity_id: str, name: str, email: Email, credit_limit: Money) -> None:
        super().__init__(entity_id)
        self.name = name
        self.email = email
        self.credit_limit = credit_limit
        self.available_credit = credit_limit
        self.status = CustomerStatus.ACTIVE

    # --- Construction Paths ---

    @classmethod
    def create(cls, entity_id: str, name: str, email: str, credit_limit: Money) -> Customer:
        """Register a new, active customer.

        Raises:
            ValidationError: If the name is blank or the email is invalid.
        """
        return unwrap_or_raise(cls.try_create(entity_id, name, email, credit_limit))

    @classmethod
    def try_create(
        cls, entity_id: str, name: str, email: str, credit_limit: Money | None
    ) -> ValueResult[Customer]:
        """Register a new, active customer, or return why it cannot be done."""
        if not name or not name.strip():
            return ValueResult.failure(
                FieldValidationError("name", "Customer name is required")
            )
        if credit_limit is None:
            return ValueResult.failure(Error.null_value("Credit limit"))
        return Email.try_create(email).map(
            lambda address: cls(entity_id, name.strip(), address, credit_limit)
        )

    # --- Credit ledger ---

    def use_credit(self, amount: Money) -> Money:
        """Debit `amount` from the available credit and return what is left."""
        return unwrap_or_raise(self.try_use_credit(amount))

    def try_use_credit(self, amount: Money | None) -> ValueResult[Money]:
        if amount is None:
            return ValueResult.failure(Error.null_value("Amount"))
        if self.status is not CustomerStatus.ACTIVE:
            return ValueResult.failure(self._transition(self.status, "UsingCredit"))
        if amount.currency == self.available_credit.currency and self.available_credit < amount:
            return ValueResult.failure(
                BusinessRuleViolation(
                    "INSUFFICIENT_CREDIT",
                    f"Available credit ({self.available_credit}) is less than "
                    f"requested amount ({amount})",
                )
                .with_metadata("availableCredit", self.available_credit)
                .with_metadata("requestedAmount", amount)
            )
        return self.available_credit.try_subtract(amount).tap(self._set_available_credit)

    def restore_credit(self, amount: Money) -> None:
        """Give back previously used credit."""
        raise_for_failure(self.try_restore_credit(amount))

    def try_restore_credit(self, amount: Money | None) -> Result:
        if amount is None:
            return Result.failure(Error.null_value("Amount"))
        if self.status is not CustomerStatus.ACTIVE:
            return Result.failure(self._transition(self.status, "RestoringCredit"))
        return (
            self.available_credit.try_add(amount)
            .ensure(
                lambda restored: restored <= self.credit_limit,
                BusinessRuleViolation(
                    "CREDIT_OVERFLOW",
                    f"Restoring {amount} would exceed credit limit of {self.credit_limit}",
                )
                .with_metadata("currentCredit", self.available_credit)
                .with_metadata("creditLimit", self.credit_limit)
                .with_metadata("attemptedRestore", amount),
            )
            .tap(self._set_available_credit)
            .to_unit()
        )

    def _set_available_credit(self, value: Money) -> None:
        self.available_credit = value

    # --- Status ---

    def suspend(self, reason: str) -> None:
        raise_for_failure(self.try_suspend(reason))

    def try_suspend(self, reason: str | None) -> Result:
        if self.status is not CustomerStatus.ACTIVE:
            return Result.failure(self._transition(self.status, CustomerStatus.SUSPENDED))
        if not reason or not reason.strip():
            return Result.failure(
                FieldValidationError("reason", "Suspension reason is required")
            )
        return self._move_to(CustomerStatus.SUSPENDED)

    def activate(self) -> None:
        raise_for_failure(self.try_activate())

    def try_activate(self) -> Result:
        if self.status is not CustomerStatus.SUSPENDED:
            return Result.failure(self._transition(self.status, CustomerStatus.ACTIVE))
        return self._move_to(CustomerStatus.ACTIVE)

    def close(self) -> None:
        raise_for_failure(self.try_close())

    def try_close(self) -> Result:
        if self.status is CustomerStatus.CLOSED:
            return Result.failure(self._transition(self.status, CustomerStatus.CLOSED))
        return self._move_to(CustomerStatus.CLOSED)

    def _move_to(self, status: CustomerStatus) -> Result:
        self.status = status
        self._bump_version()
        return Result.success()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": str(self.email),
            "status": self.status.value,
            "creditLimit": self.credit_limit.to_dict(),
            "availableCredit": self.available_credit.to_dict(),
            "version": self.version,
        }
