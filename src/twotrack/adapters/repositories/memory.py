"""In-memory repositories backed by an `InMemoryStore`."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, Sequence
from typing import Generic, TypeVar

from twotrack.domain.entities import Entity
from twotrack.domain.errors import EntityNotFoundError
from twotrack.interfaces.repositories import (
    CustomerRepository,
    OrderRepository,
    ProductRepository,
)

from .memory_store import InMemoryStore

E = TypeVar("E", bound=Entity)

logger = logging.getLogger(__name__)


class InMemoryRepositoryBase(Generic[E]):
    """Shared mechanics for in-memory repositories: get, get many, save.

    Entities are deep-copied on the way in and on the way out, so callers
    never hold a reference into the store.
    """

    KIND: str  # e.g., "Customer", "Product", ...
    BUCKET_ATTR: str  # e.g., "customers", "products", ...

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    @property
    def _bucket(self) -> dict[str, E]:
        return getattr(self._store, self.BUCKET_ATTR)

    async def get(self, entity_id: str) -> E:
        if (entity := await self.get_or_none(entity_id)) is None:
            raise EntityNotFoundError(self.KIND, entity_id)
        return entity

    async def get_or_none(self, entity_id: str) -> E | None:
        entity = self._bucket.get(entity_id)
        return copy.deepcopy(entity) if entity is not None else None

    async def get_many(self, entity_ids: Iterable[str]) -> list[E]:
        return [
            copy.deepcopy(self._bucket[entity_id])
            for entity_id in entity_ids
            if entity_id in self._bucket
        ]

    async def save(self, entity: E) -> None:
        self._bucket[entity.id] = copy.deepcopy(entity)
        logger.debug("Saved %s %s (version %d)", self.KIND, entity.id, entity.version)

    async def save_all(self, entities: Sequence[E]) -> None:
        for entity in entities:
            await self.save(entity)


class InMemoryCustomerRepository(InMemoryRepositoryBase, CustomerRepository):
    """In-memory customer repository."""

    KIND = "Customer"
    BUCKET_ATTR = "customers"


class InMemoryProductRepository(InMemoryRepositoryBase, ProductRepository):
    """In-memory product repository."""

    KIND = "Product"
    BUCKET_ATTR = "products"


class InMemoryOrderRepository(InMemoryRepositoryBase, OrderRepository):
    """In-memory order repository."""

    KIND = "Order"
    BUCKET_ATTR = "orders"
