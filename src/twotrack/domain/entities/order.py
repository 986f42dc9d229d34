"""Order entity and its line items.

Status machine::

    Pending -> Submitted -> Approved -> Shipped -> Delivered
       |           |           |
       +-----------+-----------+--> Cancelled

Items can only change while the order is pending. The total is always the sum
of the line totals, recomputed whenever the lines change.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from twotrack.domain.errors import raise_for_failure, unwrap_or_raise
from twotrack.domain.results import (
    Error,
    FieldValidationError,
    InvariantViolation,
    Result,
    ValueResult,
)
from twotrack.domain.value_objects import DEFAULT_CURRENCY, Money

from .base import Entity
from .product import Product


class OrderStatus(Enum):
    """Lifecycle states of an order."""

    PENDING = "Pending"
    SUBMITTED = "Submitted"
    APPROVED = "Approved"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


CANCELLABLE_STATUSES = frozenset(
    {OrderStatus.PENDING, OrderStatus.SUBMITTED, OrderStatus.APPROVED}
)
CREDIT_HOLDING_STATUSES = frozenset({OrderStatus.SUBMITTED, OrderStatus.APPROVED})


def _positive_quantity(quantity: int, name: str = "quantity") -> FieldValidationError:
    return FieldValidationError(name, "Quantity must be greater than zero", quantity)


@dataclass(frozen=True)
class OrderItem:
    """One order line.

    Name and unit price are snapshots taken when the line was added; later
    product changes do not affect them.
    """

    product_id: str
    product_name: str
    unit_price: Money
    quantity: int
    total_price: Money = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "total_price", self.unit_price.multiply(self.quantity))

    @classmethod
    def try_create(
        cls, product_id: str, product_name: str, unit_price: Money | None, quantity: int
    ) -> ValueResult[OrderItem]:
        if not product_id:
            return ValueResult.failure(
                FieldValidationError("productId", "Product ID is required")
            )
        if not product_name or not product_name.strip():
            return ValueResult.failure(
                FieldValidationError("productName", "Product name is required")
            )
        if unit_price is None:
            return ValueResult.failure(Error.null_value("Unit price"))
        if quantity <= 0:
            return ValueResult.failure(_positive_quantity(quantity))
        return ValueResult.success(cls(product_id, product_name, unit_price, quantity))

    def try_with_additional(self, additional: int) -> ValueResult[OrderItem]:
        """Return a copy of this line holding `additional` more units."""
        if additional <= 0:
            return ValueResult.failure(_positive_quantity(additional, "additional"))
        return OrderItem.try_create(
            self.product_id, self.product_name, self.unit_price, self.quantity + additional
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "productId": self.product_id,
            "productName": self.product_name,
            "unitPrice": self.unit_price.to_dict(),
            "quantity": self.quantity,
            "totalPrice": self.total_price.to_dict(),
        }


class Order(Entity):
    """An order placed by a customer."""

    ENTITY_TYPE = "Order"

    def __init__(
        self,
        entity_id: str,
        customer_id: str,
        shipping_address: str,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        super().__init__(entity_id)
        self.customer_id = customer_id
        self.shipping_address = shipping_address
        self.status = OrderStatus.PENDING
        self.total_amount = Money.zero(currency)
        self.shipped_at: datetime | None = None
        self.delivered_at: datetime | None = None
        self.cancellation_reason: str | None = None
        self._items: list[OrderItem] = []

    @property
    def items(self) -> tuple[OrderItem, ...]:
        return tuple(self._items)

    @property
    def currency(self) -> str:
        return self.total_amount.currency

    # --- Construction Paths ---

    @classmethod
    def create(
        cls,
        entity_id: str,
        customer_id: str,
        shipping_address: str,
        currency: str = DEFAULT_CURRENCY,
    ) -> Order:
        return unwrap_or_raise(
            cls.try_create(entity_id, customer_id, shipping_address, currency)
        )

    @classmethod
    def try_create(
        cls,
        entity_id: str,
        customer_id: str,
        shipping_address: str,
        currency: str = DEFAULT_CURRENCY,
    ) -> ValueResult[Order]:
        if not customer_id:
            return ValueResult.failure(
                FieldValidationError("customerId", "Customer ID is required")
            )
        if not shipping_address or not shipping_address.strip():
            return ValueResult.failure(
                FieldValidationError("shippingAddress", "Shipping address is required")
            )
        return Money.try_create(0, currency).map(
            lambda zero: cls(entity_id, customer_id, shipping_address.strip(), zero.currency)
        )

    # --- Lines ---

    def add_item(self, product: Product, quantity: int) -> None:
        """Add `quantity` units of `product`, merging with an existing line.

        Raises:
            ValidationError: If `quantity` is not positive.
            InvalidStateTransitionError: If the order is no longer pending.
        """
        raise_for_failure(self.try_add_item(product, quantity))

    def try_add_item(self, product: Product | None, quantity: int) -> Result:
        if product is None:
            return Result.failure(Error.null_value("Product"))
        if quantity <= 0:
            return Result.failure(_positive_quantity(quantity))
        if self.status is not OrderStatus.PENDING:
            return Result.failure(self._transition(self.status, "AddingItem"))

        index = self._index_of(product.id)
        if index is None:
            line = OrderItem.try_create(product.id, product.name, product.price, quantity)
        else:
            line = self._items[index].try_with_additional(quantity)
        if line.is_failure:
            return line.to_unit()

        items = list(self._items)
        if index is None:
            items.append(line.value)
        else:
            items[index] = line.value
        return self._commit_items(items)

    def remove_item(self, product_id: str) -> None:
        raise_for_failure(self.try_remove_item(product_id))

    def try_remove_item(self, product_id: str) -> Result:
        if self.status is not OrderStatus.PENDING:
            return Result.failure(self._transition(self.status, "RemovingItem"))
        index = self._index_of(product_id)
        if index is None:
            return Result.failure(Error.not_found("OrderItem", product_id))
        items = list(self._items)
        del items[index]
        return self._commit_items(items)

    def _index_of(self, product_id: str) -> int | None:
        for index, item in enumerate(self._items):
            if item.product_id == product_id:
                return index
        return None

    def _commit_items(self, items: list[OrderItem]) -> Result:
        total = self._try_total(items)
        if total.is_failure:
            return total.to_unit()
        self._items = items
        self.total_amount = total.value
        return Result.success()

    def _try_total(self, items: Sequence[OrderItem]) -> ValueResult[Money]:
        total = ValueResult.success(Money.zero(self.currency))
        for item in items:
            total = total.bind(lambda running, line=item: running.try_add(line.total_price))
        return total

    # --- Status ---

    def submit(self) -> None:
        raise_for_failure(self.try_submit())

    def try_submit(self) -> Result:
        if self.status is not OrderStatus.PENDING:
            return Result.failure(self._transition(self.status, OrderStatus.SUBMITTED))
        if not self._items:
            return Result.failure(
                InvariantViolation(
                    "ORDER_MUST_HAVE_ITEMS",
                    "Cannot submit an order without items",
                    len(self._items),
                    ">0",
                )
            )
        return self._move_to(OrderStatus.SUBMITTED)

    def approve(self) -> None:
        raise_for_failure(self.try_approve())

    def try_approve(self) -> Result:
        if self.status is not OrderStatus.SUBMITTED:
            return Result.failure(self._transition(self.status, OrderStatus.APPROVED))
        return self._move_to(OrderStatus.APPROVED)

    def ship(self) -> None:
        raise_for_failure(self.try_ship())

    def try_ship(self) -> Result:
        if self.status is not OrderStatus.APPROVED:
            return Result.failure(self._transition(self.status, OrderStatus.SHIPPED))
        self.shipped_at = datetime.now(UTC)
        return self._move_to(OrderStatus.SHIPPED)

    def deliver(self) -> None:
        raise_for_failure(self.try_deliver())

    def try_deliver(self) -> Result:
        if self.status is not OrderStatus.SHIPPED:
            return Result.failure(self._transition(self.status, OrderStatus.DELIVERED))
        self.delivered_at = datetime.now(UTC)
        return self._move_to(OrderStatus.DELIVERED)

    def cancel(self, reason: str) -> None:
        raise_for_failure(self.try_cancel(reason))

    def try_cancel(self, reason: str | None) -> Result:
        if self.status not in CANCELLABLE_STATUSES:
            return Result.failure(self._transition(self.status, OrderStatus.CANCELLED))
        if not reason or not reason.strip():
            return Result.failure(
                FieldValidationError("reason", "Cancellation reason is required")
            )
        self.cancellation_reason = reason.strip()
        return self._move_to(OrderStatus.CANCELLED)

    def _move_to(self, status: OrderStatus) -> Result:
        self.status = status
        return Result.success()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "customerId": self.customer_id,
            "status": self.status.value,
            "shippingAddress": self.shipping_address,
            "items": [item.to_dict() for item in self._items],
            "totalAmount": self.total_amount.to_dict(),
            "createdAt": self.created_at.isoformat(),
            "shippedAt": self.shipped_at.isoformat() if self.shipped_at else None,
            "deliveredAt": self.delivered_at.isoformat() if self.delivered_at else None,
            "cancellationReason": self.cancellation_reason,
        }
