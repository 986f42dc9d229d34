"""Demo data for a fresh in-memory store."""

from twotrack.domain.entities import Customer, Product
from twotrack.domain.value_objects import Money

from .memory_store import InMemoryStore

DEMO_CUSTOMER_ID = "3fa85f64-5717-4562-b3fc-2c963f66afa6"
DEMO_LAPTOP_ID = "1fa85f64-5717-4562-b3fc-2c963f66afa6"
DEMO_MOUSE_ID = "2fa85f64-5717-4562-b3fc-2c963f66afa6"


def seed_demo_data(store: InMemoryStore, currency: str = "USD") -> None:
    """Insert the demo customer and products, replacing any previous copies."""
    customer = Customer.create(
        DEMO_CUSTOMER_ID, "John Doe", "john@example.com", Money.create(10000, currency)
    )
    laptop = Product.create(
        DEMO_LAPTOP_ID,
        "Laptop",
        "High-performance laptop",
        Money.create("99.99", currency),
        50,
        "SKU001",
    )
    mouse = Product.create(
        DEMO_MOUSE_ID,
        "Mouse",
        "Wireless mouse",
        Money.create("29.99", currency),
        100,
        "SKU002",
    )
    store.customers[customer.id] = customer
    store.products[laptop.id] = laptop
    store.products[mouse.id] = mouse
