"""Entities package.

All entities are defined in this package and inherit from the base `Entity`
class in `base.py`. They are re-exported here to provide a single, convenient
import path.
"""

from .base import Entity
from .customer import Customer, CustomerStatus
from .order import (
    CANCELLABLE_STATUSES,
    CREDIT_HOLDING_STATUSES,
    Order,
    OrderItem,
    OrderStatus,
)
from .product import Product

__all__ = [
    "CANCELLABLE_STATUSES",
    "CREDIT_HOLDING_STATUSES",
    "Customer",
    "CustomerStatus",
    "Entity",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Product",
]
