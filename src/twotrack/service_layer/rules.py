"""Service-level business rules shared by both order services.

Each check returns the `Error` describing the violation, or `None` when the
rule holds. The result-based service returns that error as a failure; the
exception-based service raises its exception equivalent.
"""

from twotrack.domain.entities import Customer, CustomerStatus, Order, Product
from twotrack.domain.results import BusinessRuleViolation, Error, FieldValidationError
from twotrack.domain.value_objects import Money


def inactive_customer(customer: Customer) -> Error | None:
    if customer.status is CustomerStatus.ACTIVE:
        return None
    return (
        BusinessRuleViolation(
            "INACTIVE_CUSTOMER",
            f"Customer {customer.id} is not active. "
            f"Current status: {customer.status.value}",
        )
        .with_metadata("customerId", customer.id)
        .with_metadata("currentStatus", customer.status.value)
    )


def unavailable_product(product: Product) -> Error | None:
    if product.is_active:
        return None
    return BusinessRuleViolation(
        "PRODUCT_INACTIVE", f"Product {product.name} is not available for purchase"
    ).with_metadata("productId", product.id)


def invalid_quantity(quantity: int) -> Error | None:
    if quantity > 0:
        return None
    return FieldValidationError("quantity", "Quantity must be greater than zero", quantity)


def insufficient_payment(order: Order, payment: Money | None) -> Error | None:
    """Check that `payment` is given and covers the order total, in the order's currency."""
    if payment is None:
        return Error.null_value("Payment amount")
    total = order.total_amount
    if payment.currency == total.currency and payment >= total:
        return None
    if payment.currency != total.currency:
        message = (
            f"Payment currency {payment.currency} does not match "
            f"order currency {total.currency}"
        )
    else:
        message = f"Payment amount {payment} is less than order total {total}"
    return (
        BusinessRuleViolation("INSUFFICIENT_PAYMENT", message)
        .with_metadata("paymentAmount", payment)
        .with_metadata("orderTotal", total)
    )
