# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Category, Product


class CategoryRepository(Protocol):
    def list_page(self, offset: int, limit: int) -> tuple[Sequence[Category], int]: ...
    def find_by_id(self, category_id: int) -> Category | None: ...
    def add(self, category: Category) -> Category: ...
    def save(self, category: Category) -> Category: ...
    def delete(self, category_id: int) -> bool: ...


class ProductRepository(Protocol):
    def list_page(self, offset: int, limit: int) -> tuple[Sequence[Product], int]: ...
    def find_by_id(self, product_id: int) -> Product | None: ...
    def count_in_category(self, category_id: int) -> int: ...
    def add(self, product: Product) -> Product: ...
    def save(self, product: Product) -> Product: ...
    def delete(self, product_id: int) -> bool: ...
