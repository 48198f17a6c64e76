# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Category use-cases."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime

from storefront.application.pagination import Page, PageRequest
from storefront.application.results import Err, Ok, Result
from storefront.domain.catalog.entities import Category
from storefront.domain.catalog.exceptions import CategoryInUseError, CategoryNotFoundError
from storefront.domain.catalog.repositories import CategoryRepository, ProductRepository


class ListCategoriesUseCase:
    def __init__(self, categories: CategoryRepository) -> None:
        self._categories = categories

    def execute(self, request: PageRequest) -> Result[Page[Category]]:
        items, total = self._categories.list_page(request.offset, request.limit)
        return Ok(Page(items=items, total=total, request=request))


class GetCategoryUseCase:
    def __init__(self, categories: CategoryRepository) -> None:
        self._categories = categories

    def execute(self, category_id: int) -> Result[Category]:
        category = self._categories.find_by_id(category_id)
        if category is None:
            return Err(CategoryNotFoundError())
        return Ok(category)


class CreateCategoryUseCase:
    def __init__(self, categories: CategoryRepository) -> None:
        self._categories = categories

    def execute(self, name: str, description: str | None = None) -> Result[Category]:
        category = Category(
            id=0,
            name=name,
            description=description,
            created_at=datetime.now(UTC),
        )
        return Ok(self._categories.add(category))


class UpdateCategoryUseCase:
    def __init__(self, categories: CategoryRepository) -> None:
        self._categories = categories

    def execute(
        self,
        category_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
    ) -> Result[Category]:
        category = self._categories.find_by_id(category_id)
        if category is None:
            return Err(CategoryNotFoundError())
        changes: dict[str, str] = {}
        if name is not None:
            changes["name"] = name
        if description is not None:
            changes["description"] = description
        if not changes:
            return Ok(category)
        return Ok(self._categories.save(replace(category, **changes)))


class DeleteCategoryUseCase:
    def __init__(
        self,
        *,
        categories: CategoryRepository,
        products: ProductRepository,
    ) -> None:
        self._categories = categories
        self._products = products

    def execute(self, category_id: int) -> Result[None]:
        if self._categories.find_by_id(category_id) is None:
            return Err(CategoryNotFoundError())
        if self._products.count_in_category(category_id):
            return Err(CategoryInUseError())
        self._categories.delete(category_id)
        return Ok(None)


__all__ = [
    "CreateCategoryUseCase",
    "DeleteCategoryUseCase",
    "GetCategoryUseCase",
    "ListCategoriesUseCase",
    "UpdateCategoryUseCase",
]
