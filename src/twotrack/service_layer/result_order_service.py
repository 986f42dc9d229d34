"""Order use-cases, result discipline.

Every operation returns a `ValueResult[Order]`. Each step's result is checked
before the next step starts; the first failure is returned as-is and nothing is
saved. The only exception that can escape is `ResultMisuseError`, which marks a
programming mistake rather than a business outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from twotrack.domain.entities import CREDIT_HOLDING_STATUSES, Entity, Order
from twotrack.domain.results import Error, Result, ValueResult, bind_chain
from twotrack.domain.value_objects import DEFAULT_CURRENCY, Money
from twotrack.interfaces.id_generator import IdGenerator
from twotrack.interfaces.repositories import (
    CustomerRepository,
    OrderRepository,
    ProductRepository,
    Repository,
)

from . import rules
from .commands import OrderLine

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


def _rule(error: Error | None) -> Result:
    return Result.success() if error is None else Result.failure(error)


class ResultOrderService:
    """Order workflow whose operations return results instead of raising.

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

    # --- Helpers ---

    @staticmethod
    async def _fetch(repository: Repository[E], entity_id: str) -> ValueResult[E]:
        entity = await repository.get_or_none(entity_id)
        if entity is None:
            return ValueResult.failure(Error.not_found(repository.KIND, entity_id))
        return ValueResult.success(entity)

    @staticmethod
    def _report(operation: str, result: ValueResult[Order]) -> ValueResult[Order]:
        return result.tap_error(
            lambda error: logger.info("%s failed: [%s] %s", operation, error.code, error.message)
        )

    # --- Operations ---

    async def create_order(
        self, customer_id: str, shipping_address: str
    ) -> ValueResult[Order]:
        logger.debug("create_order %s", (customer_id, shipping_address))
        order = Order.try_create(
            self._ids.new_id(), customer_id, shipping_address, self._currency
        )
        if order.is_failure:
            return self._report("create_order", order)
        customer = await self._fetch(self._customers, customer_id)
        if customer.is_failure:
            return self._report("create_order", ValueResult.failure(customer.error))
        allowed = _rule(rules.inactive_customer(customer.value))
        if allowed.is_failure:
            return self._report("create_order", ValueResult.failure(allowed.error))
        await self._orders.save(order.value)
        return order

    async def add_item_to_order(
        self, order_id: str, product_id: str, quantity: int
    ) -> ValueResult[Order]:
        logger.debug("add_item_to_order %s", (order_id, product_id, quantity))
        valid = _rule(rules.invalid_quantity(quantity))
        if valid.is_failure:
            return self._report("add_item_to_order", ValueResult.failure(valid.error))
        order = await self._fetch(self._orders, order_id)
        if order.is_failure:
            return self._report("add_item_to_order", order)
        product = await self._fetch(self._products, product_id)
        if product.is_failure:
            return self._report("add_item_to_order", ValueResult.failure(product.error))

        added = (
            _rule(rules.unavailable_product(product.value))
            .bind(lambda: product.value.try_reserve_stock(quantity).to_unit())
            .bind(lambda: order.value.try_add_item(product.value, quantity))
        )
        if added.is_failure:
            return self._report("add_item_to_order", ValueResult.failure(added.error))

        await self._products.save(product.value)
        await self._orders.save(order.value)
        return order

    async def submit_order(self, order_id: str) -> ValueResult[Order]:
        logger.debug("submit_order %s", (order_id,))
        order = await self._fetch(self._orders, order_id)
        if order.is_failure:
            return self._report("submit_order", order)
        customer = await self._fetch(self._customers, order.value.customer_id)
        if customer.is_failure:
            return self._report("submit_order", ValueResult.failure(customer.error))

        submitted = order.value.try_submit().bind(
            lambda: customer.value.try_use_credit(order.value.total_amount).to_unit()
        )
        if submitted.is_failure:
            return self._report("submit_order", ValueResult.failure(submitted.error))

        await self._customers.save(customer.value)
        await self._orders.save(order.value)
        return order

    async def process_payment(
        self, order_id: str, payment: Money | None
    ) -> ValueResult[Order]:
        logger.debug("process_payment %s", (order_id, payment))
        order = await self._fetch(self._orders, order_id)
        if order.is_failure:
            return self._report("process_payment", order)

        approved = _rule(rules.insufficient_payment(order.value, payment)).bind(
            order.value.try_approve
        )
        if approved.is_failure:
            return self._report("process_payment", ValueResult.failure(approved.error))

        await self._orders.save(order.value)
        return order

    async def ship_order(self, order_id: str) -> ValueResult[Order]:
        logger.debug("ship_order %s", (order_id,))
        order = await self._fetch(self._orders, order_id)
        if order.is_failure:
            return self._report("ship_order", order)
        shipped = order.value.try_ship()
        if shipped.is_failure:
            return self._report("ship_order", ValueResult.failure(shipped.error))
        await self._orders.save(order.value)
        return order

    async def cancel_order(self, order_id: str, reason: str) -> ValueResult[Order]:
        logger.debug("cancel_order %s", (order_id, reason))
        order = await self._fetch(self._orders, order_id)
        if order.is_failure:
            return self._report("cancel_order", order)
        customer = await self._fetch(self._customers, order.value.customer_id)
        if customer.is_failure:
            return self._report("cancel_order", ValueResult.failure(customer.error))
        held_credit = order.value.status in CREDIT_HOLDING_STATUSES

        cancelled = order.value.try_cancel(reason)
        if cancelled.is_success and held_credit:
            cancelled = customer.value.try_restore_credit(order.value.total_amount)
        if cancelled.is_failure:
            return self._report("cancel_order", ValueResult.failure(cancelled.error))

        products = {
            product.id: product
            for product in await self._products.get_many(
                item.product_id for item in order.value.items
            )
        }
        for item in order.value.items:
            if (product := products.get(item.product_id)) is None:
                continue
            restocked = product.try_restock(item.quantity)
            if restocked.is_failure:
                return self._report("cancel_order", ValueResult.failure(restocked.error))

        await self._products.save_all(list(products.values()))
        if held_credit:
            await self._customers.save(customer.value)
        await self._orders.save(order.value)
        return order

    async def process_order_workflow(
        self,
        customer_id: str,
        shipping_address: str,
        lines: Sequence[OrderLine],
        payment: Money,
    ) -> ValueResult[Order]:
        """Create, fill, submit, pay and ship an order as one chain of binds.

        The chain stops at the first failing step; later steps never run.
        """
        logger.debug("process_order_workflow %s", (customer_id, shipping_address))
        return await bind_chain(
            self.create_order(customer_id, shipping_address),
            *(self._add_line(line) for line in lines),
            lambda order: self.submit_order(order.id),
            lambda order: self.process_payment(order.id, payment),
            lambda order: self.ship_order(order.id),
        )

    def _add_line(self, line: OrderLine) -> Callable[[Order], Awaitable[ValueResult[Order]]]:
        return lambda order: self.add_item_to_order(order.id, line.product_id, line.quantity)
