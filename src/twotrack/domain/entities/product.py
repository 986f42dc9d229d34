"""Product entity: price and a stock ledger."""

from __future__ import annotations

from typing import Any

from twotrack.domain.errors import raise_for_failure, unwrap_or_raise
from twotrack.domain.results import (
    BusinessRuleViolation,
    Error,
    FieldValidationError,
    Result,
    ValueResult,
)
from twotrack.domain.value_objects import Money

from .base import Entity

# pylint: disable=too-many-arguments,too-many-positional-arguments


def _positive_price() -> BusinessRuleViolation:
    return BusinessRuleViolation("POSITIVE_PRICE", "Product price must be greater than zero")


class Product(Entity):
    """A sellable product.

    Stock never goes negative, and the price currency is fixed once set.
    """

    ENTITY_TYPE = "Product"

    def __init__(
        self,
        entity_id: str,
        name: str,
        description: str,
        price: Money,
        stock_quantity: int,
        sku: str,
    ) -> None:
        super().__init__(entity_id)
        self.name = name
        self.description = description
        self.price = price
        self.stock_quantity = stock_quantity
        self.sku = sku
        self.is_active = True

    # --- Construction Paths ---

    @classmethod
    def create(
        cls,
        entity_id: str,
        name: str,
        description: str | None,
        price: Money,
        stock_quantity: int,
        sku: str,
    ) -> Product:
        return unwrap_or_raise(
            cls.try_create(entity_id, name, description, price, stock_quantity, sku)
        )

    @classmethod
    def try_create(
        cls,
        entity_id: str,
        name: str,
        description: str | None,
        price: Money | None,
        stock_quantity: int,
        sku: str,
    ) -> ValueResult[Product]:
        if not name or not name.strip():
            return ValueResult.failure(FieldValidationError("name", "Product name is required"))
        if not sku or not sku.strip():
            return ValueResult.failure(FieldValidationError("sku", "SKU is required"))
        if stock_quantity < 0:
            return ValueResult.failure(
                FieldValidationError(
                    "stockQuantity", "Stock quantity cannot be negative", stock_quantity
                )
            )
        if price is None:
            return ValueResult.failure(Error.null_value("Price"))
        if price.amount <= 0:
            return ValueResult.failure(_positive_price())
        return ValueResult.success(
            cls(
                entity_id,
                name.strip(),
                description or "",
                price,
                stock_quantity,
                sku.strip().upper(),
            )
        )

    # --- Stock ledger ---

    def reserve_stock(self, quantity: int) -> int:
        """Take `quantity` units out of stock and return what is left.

        Raises:
            ValidationError: If `quantity` is not positive.
            BusinessRuleError: If the product is inactive or stock is short.
        """
        return unwrap_or_raise(self.try_reserve_stock(quantity))

    def try_reserve_stock(self, quantity: int) -> ValueResult[int]:
        if quantity <= 0:
            return ValueResult.failure(
                FieldValidationError("quantity", "Quantity must be greater than zero", quantity)
            )
        if not self.is_active:
            return ValueResult.failure(
                BusinessRuleViolation(
                    "PRODUCT_INACTIVE", "Cannot reserve stock for inactive product"
                ).with_metadata("productId", self.id)
            )
        if self.stock_quantity < quantity:
            return ValueResult.failure(
                BusinessRuleViolation(
                    "INSUFFICIENT_STOCK",
                    f"Insufficient stock. Available: {self.stock_quantity}, "
                    f"Requested: {quantity}",
                )
                .with_metadata("availableStock", self.stock_quantity)
                .with_metadata("requestedQuantity", quantity)
            )
        self.stock_quantity -= quantity
        return ValueResult.success(self.stock_quantity)

    def restock(self, quantity: int) -> None:
        raise_for_failure(self.try_restock(quantity))

    def try_restock(self, quantity: int) -> Result:
        if quantity <= 0:
            return Result.failure(
                FieldValidationError(
                    "quantity", "Restock quantity must be greater than zero", quantity
                )
            )
        self.stock_quantity += quantity
        return Result.success()

    # --- Pricing ---

    def update_price(self, new_price: Money) -> None:
        raise_for_failure(self.try_update_price(new_price))

    def try_update_price(self, new_price: Money | None) -> Result:
        if new_price is None:
            return Result.failure(Error.null_value("New price"))
        if new_price.amount <= 0:
            return Result.failure(_positive_price())
        if new_price.currency != self.price.currency:
            return Result.failure(
                BusinessRuleViolation(
                    "CURRENCY_CHANGE",
                    f"Cannot change currency from {self.price.currency} "
                    f"to {new_price.currency}",
                )
                .with_metadata("currentCurrency", self.price.currency)
                .with_metadata("newCurrency", new_price.currency)
            )
        self.price = new_price
        return Result.success()

    # --- Availability ---

    def deactivate(self) -> None:
        raise_for_failure(self.try_deactivate())

    def try_deactivate(self) -> Result:
        if not self.is_active:
            return Result.failure(self._transition("Inactive", "Deactivating"))
        self.is_active = False
        return Result.success()

    def activate(self) -> None:
        raise_for_failure(self.try_activate())

    def try_activate(self) -> Result:
        if self.is_active:
            return Result.failure(self._transition("Active", "Activating"))
        if self.stock_quantity <= 0:
            return Result.failure(
                BusinessRuleViolation("NO_STOCK", "Cannot activate product with no stock")
            )
        self.is_active = True
        return Result.success()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "sku": self.sku,
            "price": self.price.to_dict(),
            "stockQuantity": self.stock_quantity,
            "isActive": self.is_active,
        }
