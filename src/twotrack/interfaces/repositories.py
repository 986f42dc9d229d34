"""Defines the repository interfaces for entities."""

from __future__ import annotations

import abc
from collections.abc import Iterable, Sequence
from typing import ClassVar, Generic, TypeVar

from twotrack.domain.entities import Customer, Entity, Order, Product

E = TypeVar("E", bound=Entity)


class Repository(abc.ABC, Generic[E]):
    """Async persistence port for one entity type.

    Implementations hand out copies: changes to a fetched entity are only
    visible to later fetches once the entity has been saved.
    """

    KIND: ClassVar[str]  # e.g., "Customer", "Order"

    @abc.abstractmethod
    async def get(self, entity_id: str) -> E:
        """Get an entity by its id.

        Raises:
            EntityNotFoundError: If no entity has that id.
        """

    @abc.abstractmethod
    async def get_or_none(self, entity_id: str) -> E | None:
        """Get an entity by its id, or `None` if it does not exist."""

    @abc.abstractmethod
    async def get_many(self, entity_ids: Iterable[str]) -> list[E]:
        """Get every entity found among `entity_ids`.

        Missing ids are skipped; the result follows the order of `entity_ids`.
        """

    @abc.abstractmethod
    async def save(self, entity: E) -> None:
        """Insert or replace one entity."""

    @abc.abstractmethod
    async def save_all(self, entities: Sequence[E]) -> None:
        """Insert or replace several entities."""


class CustomerRepository(Repository[Customer]):
    """Repository of customers."""

    KIND = "Customer"


class ProductRepository(Repository[Product]):
    """Repository of products."""

    KIND = "Product"


class OrderRepository(Repository[Order]):
    """Repository of orders."""

    KIND = "Order"
