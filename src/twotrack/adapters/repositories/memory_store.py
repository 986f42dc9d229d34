"""In-memory shared data store for repository adapters."""

from dataclasses import dataclass, field

from twotrack.domain.entities import Customer, Order, Product


@dataclass(slots=True)
class InMemoryStore:
    """Shared in-memory backing store for the in-memory repositories.

    A single shared instance should be passed to all repositories so they
    operate on a common data source. Each mapping is keyed by entity id and
    holds the last *saved* copy of that entity.
    """

    customers: dict[str, Customer] = field(default_factory=dict)
    products: dict[str, Product] = field(default_factory=dict)
    orders: dict[str, Order] = field(default_factory=dict)
