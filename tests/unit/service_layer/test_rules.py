"""Unit tests for the service-level business rules."""

import pytest

from tests.fixtures.domain import usd
from twotrack.domain.results import ErrorType
from twotrack.domain.value_objects import Money
from twotrack.service_layer import rules

# pylint: disable=magic-value-comparison


def test_active_customer_passes(make_customer):
    assert rules.inactive_customer(make_customer()) is None


def test_suspended_customer_is_rejected(make_customer):
    customer = make_customer()
    customer.suspend("fraud check")
    error = rules.inactive_customer(customer)
    assert error.code == "BUSINESS_RULE_INACTIVE_CUSTOMER"
    assert error.message == "Customer cust-1 is not active. Current status: Suspended"
    assert error.metadata["currentStatus"] == "Suspended"


def test_inactive_product_is_unavailable(make_product):
    product = make_product()
    assert rules.unavailable_product(product) is None
    product.deactivate()
    error = rules.unavailable_product(product)
    assert error.code == "BUSINESS_RULE_PRODUCT_INACTIVE"
    assert error.message == "Product Widget is not available for purchase"


@pytest.mark.parametrize(("quantity", "ok"), [(1, True), (0, False), (-3, False)])
def test_invalid_quantity(quantity, ok):
    error = rules.invalid_quantity(quantity)
    if ok:
        assert error is None
    else:
        assert error.type is ErrorType.VALIDATION
        assert dict(error.metadata) == {"field": "quantity", "attemptedValue": quantity}


@pytest.fixture
def order_of_200(make_order, make_product):
    order = make_order()
    order.add_item(make_product(), 2)
    return order


def test_payment_covering_total_passes(order_of_200):
    assert rules.insufficient_payment(order_of_200, usd(200)) is None
    assert rules.insufficient_payment(order_of_200, usd(250)) is None


def test_short_payment_is_rejected(order_of_200):
    error = rules.insufficient_payment(order_of_200, usd(150))
    assert error.code == "BUSINESS_RULE_INSUFFICIENT_PAYMENT"
    assert error.message == "Payment amount 150.00 USD is less than order total 200.00 USD"
    assert error.metadata["orderTotal"] == usd(200)


def test_payment_in_other_currency_is_rejected(order_of_200):
    error = rules.insufficient_payment(order_of_200, Money.create(500, "EUR"))
    assert error.code == "BUSINESS_RULE_INSUFFICIENT_PAYMENT"
    assert "does not match" in error.message


def test_missing_payment_is_a_null_value(order_of_200):
    error = rules.insufficient_payment(order_of_200, None)
    assert (error.code, error.type) == ("NULL_VALUE", ErrorType.VALIDATION)
    assert error.message == "Payment amount cannot be null"
