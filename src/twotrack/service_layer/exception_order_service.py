"""Order use-cases, exception discipline.

Every failure surfaces as a `DomainError` raised by the step that detected it
and propagates to the caller unchanged. A step never runs after an earlier one
has raised, and nothing is saved unless every step of the operation succeeded.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import ParamSpec, TypeVar

from twotrack.domain.entities import CREDIT_HOLDING_STATUSES, Order
from twotrack.domain.errors import DomainError, exception_from_error
from twotrack.domain.results import Error
from twotrack.domain.value_objects import DEFAULT_CURRENCY, Money
from twotrack.interfaces.id_generator import IdGenerator
from twotrack.interfaces.repositories import (
    CustomerRepository,
    OrderRepository,
    ProductRepository,
)

from . import rules
from .commands import OrderLine

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


def _logged(fn: Callable[P, Awaitable[T]]) -> Callable[P, Awaitable[T]]:
    """Log the call at DEBUG and any domain failure at INFO, then re-raise it."""

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        logger.debug("%s %s", fn.__name__, args[1:])
        try:
            return await fn(*args, **kwargs)
        except DomainError as exc:
            logger.info("%s failed: [%s] %s", fn.__name__, exc.code, exc.detail)
            raise

    return wrapper


def _check(error: Error | None) -> None:
    if error is not None:
        raise exception_from_error(error)


class ExceptionOrderService:
    """Order workflow whose operations raise on failure.

    Args:
        customers: Customer repository.
        products: Product repository.
        orders: Order repository.
        id_generator: Source of new order ids.
        currency: Currency new orders are priced in.
    """

    def __init__(
        self,
        customers: CustomerRepository,
        products: ProductRepository,
        orders: OrderRepository,
        id_generator: IdGenerator,
        currency: str = DEFAULT_CURRENCY,
    ) -> None:
        self._customers = customers
        self._products = products
        self._orders = orders
        self._ids = id_generator
        self._currency = currency

    @_logged
    async def create_order(self, customer_id: str, shipping_address: str) -> Order:
        """Open a pending order for an active customer.

        Raises:
            ValidationError: If the customer id or address is blank.
            EntityNotFoundError: If the customer does not exist.
            BusinessRuleError: If the customer is not active.
        """
        order = Order.create(self._ids.new_id(), customer_id, shipping_address, self._currency)
        customer = await self._customers.get(customer_id)
        _check(rules.inactive_customer(customer))
        await self._orders.save(order)
        return order

    @_logged
    async def add_item_to_order(self, order_id: str, product_id: str, quantity: int) -> Order:
        """Reserve stock for `quantity` units of a product and add them to the order."""
        _check(rules.invalid_quantity(quantity))
        order = await self._orders.get(order_id)
        product = await self._products.get(product_id)
        _check(rules.unavailable_product(product))
        product.reserve_stock(quantity)
        order.add_item(product, quantity)
        await self._products.save(product)
        await self._orders.save(order)
        return order

    @_logged
    async def submit_order(self, order_id: str) -> Order:
        """Submit a pending order, debiting the customer's credit by its total."""
        order = await self._orders.get(order_id)
        customer = await self._customers.get(order.customer_id)
        order.submit()
        customer.use_credit(order.total_amount)
        await self._customers.save(customer)
        await self._orders.save(order)
        return order

    @_logged
    async def process_payment(self, order_id: str, payment: Money | None) -> Order:
        """Approve a submitted order once `payment` covers its total."""
        order = await self._orders.get(order_id)
        _check(rules.insufficient_payment(order, payment))
        order.approve()
        await self._orders.save(order)
        return order

    @_logged
    async def ship_order(self, order_id: str) -> Order:
        order = await self._orders.get(order_id)
        order.ship()
        await self._orders.save(order)
        return order

    @_logged
    async def cancel_order(self, order_id: str, reason: str) -> Order:
        """Cancel an order, restoring held credit and restocking every line."""
        order = await self._orders.get(order_id)
        customer = await self._customers.get(order.customer_id)
        held_credit = order.status in CREDIT_HOLDING_STATUSES

        order.cancel(reason)
        if held_credit:
            customer.restore_credit(order.total_amount)
        products = {
            product.id: product
            for product in await self._products.get_many(i.product_id for i in order.items)
        }
        for item in order.items:
            if (product := products.get(item.product_id)) is not None:
                product.restock(item.quantity)

        await self._products.save_all(list(products.values()))
        if held_credit:
            await self._customers.save(customer)
        await self._orders.save(order)
        return order

    async def process_order_workflow(
        self,
        customer_id: str,
        shipping_address: str,
        lines: Sequence[OrderLine],
        payment: Money,
    ) -> Order:
        """Create, fill, submit, pay and ship an order in one go.

        Each step logs its own failure, so a failing workflow is reported once.
        """
        logger.debug("process_order_workflow %s", (customer_id, shipping_address))
        order = await self.create_order(customer_id, shipping_address)
        for line in lines:
            order = await self.add_item_to_order(order.id, line.product_id, line.quantity)
        order = await self.submit_order(order.id)
        order = await self.process_payment(order.id, payment)
        return await self.ship_order(order.id)
