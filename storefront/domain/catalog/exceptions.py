# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from storefront.shared.errors.base import ConflictError, NotFoundError


class ProductNotFoundError(NotFoundError):
    error_code = "product_not_found"


class CategoryNotFoundError(NotFoundError):
    error_code = "category_not_found"


class CategoryInUseError(ConflictError):
    error_code = "category_in_use"
