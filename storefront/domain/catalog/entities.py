# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Catalog entities and the pricing rule for bulk stock."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from storefront.domain.exceptions import InvariantViolation

BULK_QUANTITY = 100
BULK_DISCOUNT_PERCENT = 10


def compute_sale_price(full_price: float, quantity: int) -> float:
    """Products stocked in bulk sell at a fixed discount off the full price."""

    if quantity >= BULK_QUANTITY:
        return round(full_price - full_price / 100 * BULK_DISCOUNT_PERCENT, 2)
    return round(full_price, 2)


@dataclass(slots=True, frozen=True)
class Category:

    id: int
    name: str
    description: str | None = None
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise InvariantViolation("category name must not be blank", field="name")


@dataclass(slots=True, frozen=True)
class Product:

    id: int
    name: str
    description: str
    category_id: int
    full_price: float
    sale_price: float
    photo: str
    quantity: int
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.full_price < 0:
            raise InvariantViolation("price must be non-negative", field="full_price")
        if self.sale_price < 0:
            raise InvariantViolation("price must be non-negative", field="sale_price")
        if self.quantity < 0:
            raise InvariantViolation("quantity must be non-negative", field="quantity")
