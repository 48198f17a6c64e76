# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from storefront.domain.catalog.entities import Category as DomainCategory
from storefront.domain.catalog.entities import Product as DomainProduct
from storefront.domain.catalog.exceptions import CategoryNotFoundError, ProductNotFoundError
from storefront.domain.catalog.repositories import CategoryRepository, ProductRepository
from storefront.domain.users.entities import as_utc
from storefront.infrastructure.db.models import Category, Product
from storefront.infrastructure.unit_of_work import unit_of_work_scope


def _category(row: Category) -> DomainCategory:
    return DomainCategory(
        id=row.id,
        name=row.name,
        description=row.description,
        created_at=as_utc(row.created_at) if row.created_at else None,
    )


def _product(row: Product) -> DomainProduct:
    return DomainProduct(
        id=row.id,
        name=row.name,
        description=row.description or "",
        category_id=row.category_id,
        full_price=float(row.full_price),
        sale_price=float(row.sale_price),
        photo=row.photo or "",
        quantity=int(row.quantity),
        created_at=as_utc(row.created_at) if row.created_at else None,
    )


class SqlAlchemyCategoryRepository(CategoryRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_page(self, offset: int, limit: int) -> tuple[Sequence[DomainCategory], int]:
        with unit_of_work_scope(self._session_factory) as session:
            total = session.scalar(select(func.count()).select_from(Category)) or 0
            rows = session.scalars(
                select(Category).order_by(Category.id.asc()).offset(offset).limit(limit)
            ).all()
            return [_category(row) for row in rows], int(total)

    def find_by_id(self, category_id: int) -> DomainCategory | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Category, category_id)
            return _category(row) if row else None

    def add(self, category: DomainCategory) -> DomainCategory:
        with unit_of_work_scope(self._session_factory) as session:
            row = Category(name=category.name, description=category.description)
            if category.created_at is not None:
                row.created_at = category.created_at
            session.add(row)
            session.flush()
            return _category(row)

    def save(self, category: DomainCategory) -> DomainCategory:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Category, category.id)
            if row is None:
                raise CategoryNotFoundError()
            row.name = category.name
            row.description = category.description
            session.flush()
            return _category(row)

    def delete(self, category_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Category, category_id)
            if row is None:
                return False
            session.delete(row)
            return True


class SqlAlchemyProductRepository(ProductRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def list_page(self, offset: int, limit: int) -> tuple[Sequence[DomainProduct], int]:
        with unit_of_work_scope(self._session_factory) as session:
            total = session.scalar(select(func.count()).select_from(Product)) or 0
            rows = session.scalars(
                select(Product).order_by(Product.id.asc()).offset(offset).limit(limit)
            ).all()
            return [_product(row) for row in rows], int(total)

    def find_by_id(self, product_id: int) -> DomainProduct | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Product, product_id)
            return _product(row) if row else None

    def count_in_category(self, category_id: int) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            total = session.scalar(
                select(func.count())
                .select_from(Product)
                .where(Product.category_id == category_id)
            )
            return int(total or 0)

    def add(self, product: DomainProduct) -> DomainProduct:
        with unit_of_work_scope(self._session_factory) as session:
            row = Product(
                name=product.name,
                description=product.description,
                category_id=product.category_id,
                full_price=product.full_price,
                sale_price=product.sale_price,
                photo=product.photo,
                quantity=product.quantity,
            )
            if product.created_at is not None:
                row.created_at = product.created_at
            session.add(row)
            session.flush()
            return _product(row)

    def save(self, product: DomainProduct) -> DomainProduct:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Product, product.id)
            if row is None:
                raise ProductNotFoundError()
            row.name = product.name
            row.description = product.description
            row.category_id = product.category_id
            row.full_price = product.full_price
            row.sale_price = product.sale_price
            row.photo = product.photo
            row.quantity = product.quantity
            session.flush()
            return _product(row)

    def delete(self, product_id: int) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(Product, product_id)
            if row is None:
                return False
            session.delete(row)
            return True
