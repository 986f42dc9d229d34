"""Unit tests for the Product entity."""

import pytest

from tests.fixtures.domain import usd
from twotrack.domain.entities import Product
from twotrack.domain.errors import BusinessRuleError, ValidationError
from twotrack.domain.results import ErrorType
from twotrack.domain.value_objects import Money

# pylint: disable=magic-value-comparison


class TestProductCreation:
    """Tests for the create construction paths."""

    @staticmethod
    def test_create_normalizes_sku(make_product):
        product = make_product(sku=" wid-001 ", description=None)
        assert product.sku == "WID-001"
        assert product.description == ""
        assert product.is_active

    @staticmethod
    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"name": ""}, "name"),
            ({"sku": " "}, "sku"),
            ({"stock_quantity": -1}, "stockQuantity"),
        ],
    )
    def test_invalid_input_in_both_forms(overrides, field):
        fields = {
            "entity_id": "p-1",
            "name": "Widget",
            "description": "",
            "price": usd(1),
            "stock_quantity": 1,
            "sku": "W1",
        } | overrides
        assert Product.try_create(**fields).error.metadata["field"] == field
        with pytest.raises(ValidationError) as excinfo:
            Product.create(**fields)
        assert excinfo.value.field == field

    @staticmethod
    def test_price_must_be_positive():
        result = Product.try_create("p-1", "Widget", "", usd(0), 1, "W1")
        assert result.error.code == "BUSINESS_RULE_POSITIVE_PRICE"
        with pytest.raises(BusinessRuleError):
            Product.create("p-1", "Widget", "", usd(0), 1, "W1")


class TestStockLedger:
    """Tests for reserving and restocking."""

    @staticmethod
    def test_reserve_returns_remaining(make_product):
        product = make_product()
        assert product.reserve_stock(4) == 6
        assert product.stock_quantity == 6

    @staticmethod
    def test_over_reservation_leaves_stock_unchanged(make_product):
        product = make_product(stock_quantity=3)
        result = product.try_reserve_stock(5)
        assert result.error.code == "BUSINESS_RULE_INSUFFICIENT_STOCK"
        assert result.error.message == "Insufficient stock. Available: 3, Requested: 5"
        assert dict(result.error.metadata) == {
            "ruleName": "INSUFFICIENT_STOCK",
            "availableStock": 3,
            "requestedQuantity": 5,
        }
        with pytest.raises(BusinessRuleError):
            product.reserve_stock(5)
        assert product.stock_quantity == 3

    @staticmethod
    @pytest.mark.parametrize("quantity", [0, -2])
    def test_quantity_must_be_positive(make_product, quantity):
        error = make_product().try_reserve_stock(quantity).error
        assert error.type is ErrorType.VALIDATION
        assert error.metadata["field"] == "quantity"
        assert make_product().try_restock(quantity).error.metadata["field"] == "quantity"

    @staticmethod
    def test_inactive_product_cannot_be_reserved(make_product):
        product = make_product()
        product.deactivate()
        assert product.try_reserve_stock(1).error.code == "BUSINESS_RULE_PRODUCT_INACTIVE"

    @staticmethod
    def test_restock(make_product):
        product = make_product()
        product.restock(5)
        assert product.stock_quantity == 15


class TestPricingAndAvailability:
    """Tests for price updates and activation."""

    @staticmethod
    def test_update_price(make_product):
        product = make_product()
        product.update_price(usd(120))
        assert product.price == usd(120)

    @staticmethod
    def test_price_currency_is_fixed(make_product):
        result = make_product().try_update_price(Money.create(120, "EUR"))
        assert result.error.code == "BUSINESS_RULE_CURRENCY_CHANGE"

    @staticmethod
    def test_deactivate_twice(make_product):
        product = make_product()
        product.deactivate()
        error = product.try_deactivate().error
        assert error.code == "INVALID_STATE_TRANSITION"
        assert (error.from_state, error.to_state) == ("Inactive", "Deactivating")

    @staticmethod
    def test_activate_requires_stock(make_product):
        product = make_product(stock_quantity=0)
        product.deactivate()
        assert product.try_activate().error.code == "BUSINESS_RULE_NO_STOCK"
        product.restock(1)
        product.activate()
        assert product.is_active

    @staticmethod
    def test_activate_active_product(make_product):
        error = make_product().try_activate().error
        assert error.code == "INVALID_STATE_TRANSITION"
        assert error.message == "Cannot transition from 'Active' to 'Activating' for Product"
