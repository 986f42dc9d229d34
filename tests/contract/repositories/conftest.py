"""Fixtures for repository contract tests.

Each param pairs one repository with a factory for the entity kind it stores,
so every test runs once per kind.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

import pytest

from twotrack.adapters.repositories import (
    InMemoryCustomerRepository,
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryStore,
)
from twotrack.domain.entities import Entity
from twotrack.interfaces.repositories import Repository


@dataclass
class RepositoryCase:
    """A repository under test plus a factory for entities it can store."""

    repo: Repository[Any]
    make: Callable[[str], Entity]


@pytest.fixture(params=["customer", "product", "order"])
def repo_case(
    request, make_customer, make_product, make_order
) -> Iterable[RepositoryCase]:
    store = InMemoryStore()
    match request.param:
        case "customer":
            yield RepositoryCase(
                InMemoryCustomerRepository(store), lambda i: make_customer(entity_id=i)
            )
        case "product":
            yield RepositoryCase(
                InMemoryProductRepository(store), lambda i: make_product(entity_id=i)
            )
        case "order":
            yield RepositoryCase(
                InMemoryOrderRepository(store), lambda i: make_order(entity_id=i)
            )
        case _:
            raise ValueError(f"unknown repository kind: {request.param}")
