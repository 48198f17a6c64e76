# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .sqlalchemy_catalog_repository import (
    SqlAlchemyCategoryRepository,
    SqlAlchemyProductRepository,
)

__all__ = ["SqlAlchemyCategoryRepository", "SqlAlchemyProductRepository"]
