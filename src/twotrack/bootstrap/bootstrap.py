"""Wire repositories, ID generator and both order services together."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from twotrack import config
from twotrack.adapters.id_generators import GENERATORS, SimpleIdGenerator
from twotrack.adapters.repositories import (
    InMemoryCustomerRepository,
    InMemoryOrderRepository,
    InMemoryProductRepository,
    InMemoryStore,
    seed_demo_data,
)
from twotrack.interfaces.id_generator import IdGenerator
from twotrack.interfaces.repositories import (
    CustomerRepository,
    OrderRepository,
    ProductRepository,
)
from twotrack.service_layer.exception_order_service import ExceptionOrderService
from twotrack.service_layer.result_order_service import ResultOrderService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContainer:
    """Everything an entrypoint needs, already wired."""

    settings: config.Settings
    store: InMemoryStore
    customers: CustomerRepository
    products: ProductRepository
    orders: OrderRepository
    exception_service: ExceptionOrderService
    result_service: ResultOrderService


def build_id_generator(name: str) -> IdGenerator:
    """Build the ID generator registered under `name`.

    Raises:
        config.InvalidConfigurationError: If no generator has that name.
    """
    if name == "simple":
        return SimpleIdGenerator(prefix="order")
    if (generator_cls := GENERATORS.get(name)) is None:
        raise config.InvalidConfigurationError(
            config.ID_GENERATOR_ENV, name, "one of " + ", ".join(GENERATORS)
        )
    return generator_cls()


def bootstrap(
    settings: config.Settings | None = None,
    store: InMemoryStore | None = None,
    id_generator: IdGenerator | None = None,
) -> AppContainer:
    """Build an `AppContainer`.

    Args:
        settings: Settings to use; read from the environment when omitted.
        store: Backing store to share; a fresh one is created when omitted.
        id_generator: Order id source; built from `settings` when omitted.
    """
    settings = settings or config.load_settings()
    if store is None:
        store = InMemoryStore()
        if settings.seed_demo_data:
            seed_demo_data(store, settings.default_currency)
            logger.debug("Seeded demo data in %s", settings.default_currency)
    id_generator = id_generator or build_id_generator(settings.id_generator)

    customers = InMemoryCustomerRepository(store)
    products = InMemoryProductRepository(store)
    orders = InMemoryOrderRepository(store)
    services = (customers, products, orders, id_generator, settings.default_currency)

    return AppContainer(
        settings=settings,
        store=store,
        customers=customers,
        products=products,
        orders=orders,
        exception_service=ExceptionOrderService(*services),
        result_service=ResultOrderService(*services),
    )
