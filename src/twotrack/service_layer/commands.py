"""Module defining request objects accepted by the order services."""

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderLine:
    """One requested line of an order: which product, how many units."""

    product_id: str
    quantity: int
