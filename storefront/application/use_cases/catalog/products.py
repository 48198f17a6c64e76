# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Product use-cases. Sale price follows the bulk rule unless set explicitly."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Any

from storefront.application.pagination import Page, PageRequest
from storefront.application.results import Err, Ok, Result
from storefront.domain.catalog.entities import Product, compute_sale_price
from storefront.domain.catalog.exceptions import CategoryNotFoundError, ProductNotFoundError
from storefront.domain.catalog.repositories import CategoryRepository, ProductRepository


@dataclass(slots=True, frozen=True)
class ProductDraft:
    name: str
    description: str
    category_id: int
    full_price: float
    photo: str
    quantity: int


class ListProductsUseCase:
    def __init__(self, products: ProductRepository) -> None:
        self._products = products

    def execute(self, request: PageRequest) -> Result[Page[Product]]:
        items, total = self._products.list_page(request.offset, request.limit)
        return Ok(Page(items=items, total=total, request=request))


class GetProductUseCase:
    def __init__(self, products: ProductRepository) -> None:
        self._products = products

    def execute(self, product_id: int) -> Result[Product]:
        product = self._products.find_by_id(product_id)
        if product is None:
            return Err(ProductNotFoundError())
        return Ok(product)


class CreateProductUseCase:
    def __init__(
        self,
        *,
        products: ProductRepository,
        categories: CategoryRepository,
    ) -> None:
        self._products = products
        self._categories = categories

    def execute(self, draft: ProductDraft) -> Result[Product]:
        if self._categories.find_by_id(draft.category_id) is None:
            return Err(CategoryNotFoundError())
        product = Product(
            id=0,
            name=draft.name,
            description=draft.description,
            category_id=draft.category_id,
            full_price=draft.full_price,
            sale_price=compute_sale_price(draft.full_price, draft.quantity),
            photo=draft.photo,
            quantity=draft.quantity,
            created_at=datetime.now(UTC),
        )
        return Ok(self._products.add(product))


class UpdateProductUseCase:
    def __init__(
        self,
        *,
        products: ProductRepository,
        categories: CategoryRepository,
    ) -> None:
        self._products = products
        self._categories = categories

    def execute(self, product_id: int, changes: dict[str, Any]) -> Result[Product]:
        product = self._products.find_by_id(product_id)
        if product is None:
            return Err(ProductNotFoundError())

        category_id = changes.get("category_id")
        if category_id is not None and self._categories.find_by_id(category_id) is None:
            return Err(CategoryNotFoundError())

        updated = replace(product, **changes)
        if "sale_price" not in changes:
            updated = replace(
                updated,
                sale_price=compute_sale_price(updated.full_price, updated.quantity),
            )
        return Ok(self._products.save(updated))


class DeleteProductUseCase:
    def __init__(self, products: ProductRepository) -> None:
        self._products = products

    def execute(self, product_id: int) -> Result[None]:
        if not self._products.delete(product_id):
            return Err(ProductNotFoundError())
        return Ok(None)


__all__ = [
    "CreateProductUseCase",
    "DeleteProductUseCase",
    "GetProductUseCase",
    "ListProductsUseCase",
    "ProductDraft",
    "UpdateProductUseCase",
]
