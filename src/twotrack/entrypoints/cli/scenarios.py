"""Canned order scenarios, runnable through either error-handling discipline.

Each scenario is written once against a small driver. The exception driver
calls `ExceptionOrderService` and lets `DomainError` propagate; the result
driver calls `ResultOrderService` and turns a failed result into
`ScenarioFailed`. `run_scenario` renders either kind of failure as Problem
Details, so both disciplines print the same document for the same failure.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from twotrack.bootstrap import (
    DEMO_CUSTOMER_ID,
    DEMO_LAPTOP_ID,
    DEMO_MOUSE_ID,
    AppContainer,
)
from twotrack.domain.entities import Order
from twotrack.domain.errors import DomainError
from twotrack.domain.results import Error
from twotrack.domain.value_objects import Money
from twotrack.entrypoints.problem_details import (
    problem_from_error,
    problem_from_exception,
)
from twotrack.service_layer.commands import OrderLine

SHIPPING_ADDRESS = "123 Main St, Springfield"


class Discipline(Enum):
    """How failures travel back from the services."""

    EXCEPTIONS = "exceptions"
    RESULTS = "results"


class ScenarioFailed(Exception):
    """A result-based step returned a failure."""

    def __init__(self, error: Error) -> None:
        super().__init__(str(error))
        self.error = error


@dataclass(frozen=True)
class ScenarioOutcome:
    """What a scenario produced: a JSON-ready payload, and whether it succeeded."""

    succeeded: bool
    payload: dict[str, Any]


class _Driver:
    """Calls one service operation by name and returns the resulting order."""

    def __init__(self, container: AppContainer, discipline: Discipline) -> None:
        self.container = container
        self.discipline = discipline

    async def __call__(self, operation: str, *args: Any) -> Order:
        if self.discipline is Discipline.EXCEPTIONS:
            return await getattr(self.container.exception_service, operation)(*args)
        result = await getattr(self.container.result_service, operation)(*args)
        if result.is_failure:
            raise ScenarioFailed(result.error)
        return result.value

    async def snapshot(self, order: Order) -> dict[str, Any]:
        """Order, customer and the order's products as currently stored."""
        customer = await self.container.customers.get(order.customer_id)
        products = await self.container.products.get_many(i.product_id for i in order.items)
        return {
            "order": order.to_dict(),
            "customer": customer.to_dict(),
            "products": [product.to_dict() for product in products],
        }


async def _checkout(run: _Driver) -> dict[str, Any]:
    order = await run("create_order", DEMO_CUSTOMER_ID, SHIPPING_ADDRESS)
    order = await run("add_item_to_order", order.id, DEMO_LAPTOP_ID, 2)
    order = await run("submit_order", order.id)
    return await run.snapshot(order)


async def _cancel(run: _Driver) -> dict[str, Any]:
    order = await run("create_order", DEMO_CUSTOMER_ID, SHIPPING_ADDRESS)
    order = await run("add_item_to_order", order.id, DEMO_LAPTOP_ID, 2)
    order = await run("submit_order", order.id)
    order = await run("cancel_order", order.id, "changed mind")
    return await run.snapshot(order)


async def _zero_quantity(run: _Driver) -> dict[str, Any]:
    order = await run("create_order", DEMO_CUSTOMER_ID, SHIPPING_ADDRESS)
    order = await run("add_item_to_order", order.id, DEMO_LAPTOP_ID, 0)
    return await run.snapshot(order)


async def _ship_pending(run: _Driver) -> dict[str, Any]:
    order = await run("create_order", DEMO_CUSTOMER_ID, SHIPPING_ADDRESS)
    order = await run("add_item_to_order", order.id, DEMO_MOUSE_ID, 1)
    order = await run("ship_order", order.id)
    return await run.snapshot(order)


async def _workflow(run: _Driver) -> dict[str, Any]:
    order = await run(
        "process_order_workflow",
        DEMO_CUSTOMER_ID,
        SHIPPING_ADDRESS,
        [OrderLine(DEMO_LAPTOP_ID, 1), OrderLine(DEMO_MOUSE_ID, 2)],
        Money.create(1000, run.container.settings.default_currency),
    )
    return await run.snapshot(order)


SCENARIOS: dict[str, Callable[[_Driver], Awaitable[dict[str, Any]]]] = {
    "checkout": _checkout,
    "cancel": _cancel,
    "zero-quantity": _zero_quantity,
    "ship-pending": _ship_pending,
    "workflow": _workflow,
}


async def run_scenario(
    name: str, discipline: Discipline, container: AppContainer
) -> ScenarioOutcome:
    """Run scenario `name` against `container` using `discipline`.

    Raises:
        KeyError: If no scenario has that name.
    """
    scenario = SCENARIOS[name]
    type_base = container.settings.problem_type_base
    instance = f"/scenarios/{name}"
    try:
        payload = await scenario(_Driver(container, discipline))
    except DomainError as exc:
        return ScenarioOutcome(
            False, problem_from_exception(exc, instance, type_base=type_base)
        )
    except ScenarioFailed as failed:
        return ScenarioOutcome(
            False, problem_from_error(failed.error, instance, type_base=type_base)
        )
    return ScenarioOutcome(True, payload)
