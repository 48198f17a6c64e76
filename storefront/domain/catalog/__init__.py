# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import BULK_DISCOUNT_PERCENT, BULK_QUANTITY, Category, Product, compute_sale_price
from .exceptions import CategoryInUseError, CategoryNotFoundError, ProductNotFoundError
from .repositories import CategoryRepository, ProductRepository

__all__ = [
    "BULK_DISCOUNT_PERCENT",
    "BULK_QUANTITY",
    "Category",
    "CategoryInUseError",
    "CategoryNotFoundError",
    "CategoryRepository",
    "Product",
    "ProductNotFoundError",
    "ProductRepository",
    "compute_sale_price",
]
