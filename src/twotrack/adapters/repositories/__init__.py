"""In-memory repository adapters and demo seed data."""

from .memory import (
    InMemoryCustomerRepository,
    InMemoryOrderRepository,
    InMemoryProductRepository,
)
from .memory_store import InMemoryStore
from .seed import DEMO_CUSTOMER_ID, DEMO_LAPTOP_ID, DEMO_MOUSE_ID, seed_demo_data

__all__ = [
    "DEMO_CUSTOMER_ID",
    "DEMO_LAPTOP_ID",
    "DEMO_MOUSE_ID",
    "InMemoryCustomerRepository",
    "InMemoryOrderRepository",
    "InMemoryProductRepository",
    "InMemoryStore",
    "seed_demo_data",
]
