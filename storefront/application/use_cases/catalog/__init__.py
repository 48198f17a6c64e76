# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .categories import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
    UpdateCategoryUseCase,
)
from .products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    GetProductUseCase,
    ListProductsUseCase,
    ProductDraft,
    UpdateProductUseCase,
)

__all__ = [
    "CreateCategoryUseCase",
    "CreateProductUseCase",
    "DeleteCategoryUseCase",
    "DeleteProductUseCase",
    "GetCategoryUseCase",
    "GetProductUseCase",
    "ListCategoriesUseCase",
    "ListProductsUseCase",
    "ProductDraft",
    "UpdateCategoryUseCase",
    "UpdateProductUseCase",
]
