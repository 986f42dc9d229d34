"""Default marks and drivers for tests under `tests/functional/`.

The `orders` fixture runs each test once per error-handling discipline and
normalizes what comes back, so one test body states the expected behavior for
both services.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest

from twotrack.bootstrap import AppContainer
from twotrack.domain.entities import Order, Product
from twotrack.domain.errors import DomainError
from twotrack.domain.results import ErrorType

# pylint: disable=unused-argument,redefined-outer-name

FUNCTIONAL_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "functional"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add default `functional` marks to items in `tests/functional/`."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        if FUNCTIONAL_ROOT in path.parents:
            if not any(marker.name == MARKER_NAME for marker in item.iter_markers()):
                item.add_marker(pytest.mark.functional)


@dataclass(frozen=True)
class Failure:
    """A failure reduced to what both disciplines must agree on."""

    code: str
    category: ErrorType
    message: str
    context: dict[str, Any]


class OrderDriver:
    """Calls one order service and returns either the order or a `Failure`."""

    def __init__(self, container: AppContainer, discipline: str) -> None:
        self.container = container
        self.discipline = discipline

    async def __call__(self, operation: str, *args: Any) -> Order | Failure:
        if self.discipline == "exceptions":
            try:
                return await getattr(self.container.exception_service, operation)(*args)
            except DomainError as exc:
                return Failure(exc.code, exc.category, exc.detail, dict(exc.extensions))
        result = await getattr(self.container.result_service, operation)(*args)
        if result.is_failure:
            error = result.error
            return Failure(error.code, error.type, error.message, dict(error.metadata))
        return result.value


@pytest.fixture(params=["exceptions", "results"])
def orders(request, container: AppContainer) -> OrderDriver:
    return OrderDriver(container, request.param)


@pytest.fixture
def widget(container: AppContainer, make_product) -> Product:
    """A 100 USD product with 10 in stock, stored as `prod-1`."""
    product = make_product()
    container.store.products[product.id] = product
    return product
