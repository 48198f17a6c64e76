from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

import pytest

from storefront.application.pagination import PageRequest
from storefront.application.results import Err, Ok
from storefront.application.use_cases.catalog.categories import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    ListCategoriesUseCase,
    UpdateCategoryUseCase,
)
from storefront.application.use_cases.catalog.products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    GetProductUseCase,
    ProductDraft,
    UpdateProductUseCase,
)
from storefront.domain.catalog.entities import Category, Product
from storefront.domain.catalog.exceptions import (
    CategoryInUseError,
    CategoryNotFoundError,
    ProductNotFoundError,
)
from storefront.domain.catalog.repositories import CategoryRepository, ProductRepository


class InMemoryCategoryRepository(CategoryRepository):
    def __init__(self) -> None:
        self._rows: dict[int, Category] = {}
        self._seq = 1

    def list_page(self, offset: int, limit: int) -> tuple[Sequence[Category], int]:
        rows = sorted(self._rows.values(), key=lambda c: c.id)
        return rows[offset : offset + limit], len(rows)

    def find_by_id(self, category_id: int) -> Category | None:
        return self._rows.get(category_id)

    def add(self, category: Category) -> Category:
        stored = replace(category, id=self._seq)
        self._seq += 1
        self._rows[stored.id] = stored
        return stored

    def save(self, category: Category) -> Category:
        self._rows[category.id] = category
        return category

    def delete(self, category_id: int) -> bool:
        return self._rows.pop(category_id, None) is not None


class InMemoryProductRepository(ProductRepository):
    def __init__(self) -> None:
        self._rows: dict[int, Product] = {}
        self._seq = 1

    def list_page(self, offset: int, limit: int) -> tuple[Sequence[Product], int]:
        rows = sorted(self._rows.values(), key=lambda p: p.id)
        return rows[offset : offset + limit], len(rows)

    def find_by_id(self, product_id: int) -> Product | None:
        return self._rows.get(product_id)

    def count_in_category(self, category_id: int) -> int:
        return sum(1 for p in self._rows.values() if p.category_id == category_id)

    def add(self, product: Product) -> Product:
        stored = replace(product, id=self._seq)
        self._seq += 1
        self._rows[stored.id] = stored
        return stored

    def save(self, product: Product) -> Product:
        self._rows[product.id] = product
        return product

    def delete(self, product_id: int) -> bool:
        return self._rows.pop(product_id, None) is not None


@pytest.fixture()
def categories() -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository()


@pytest.fixture()
def products() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture()
def kitchen(categories: InMemoryCategoryRepository) -> Category:
    return CreateCategoryUseCase(categories).execute("Kitchen").value


def _draft(category_id: int, quantity: int = 10) -> ProductDraft:
    return ProductDraft(
        name="Pan",
        description="Cast iron",
        category_id=category_id,
        full_price=80.0,
        photo="pan.png",
        quantity=quantity,
    )


@pytest.mark.parametrize(("quantity", "sale_price"), [(99, 80.0), (100, 72.0)])
def test_create_product_derives_sale_price(
    categories, products, kitchen, quantity: int, sale_price: float
) -> None:
    result = CreateProductUseCase(products=products, categories=categories).execute(
        _draft(kitchen.id, quantity)
    )

    assert isinstance(result, Ok)
    assert result.value.sale_price == sale_price


def test_create_product_unknown_category(categories, products) -> None:
    result = CreateProductUseCase(products=products, categories=categories).execute(_draft(7))

    assert isinstance(result, Err)
    assert isinstance(result.error, CategoryNotFoundError)


def test_update_product_recomputes_unless_sale_price_given(categories, products, kitchen) -> None:
    created = CreateProductUseCase(products=products, categories=categories).execute(
        _draft(kitchen.id)
    )
    update = UpdateProductUseCase(products=products, categories=categories)

    repriced = update.execute(created.value.id, {"full_price": 100.0})
    pinned = update.execute(created.value.id, {"sale_price": 55.0, "quantity": 500})

    assert repriced.value.sale_price == 100.0
    assert pinned.value.sale_price == 55.0
    assert pinned.value.quantity == 500


def test_update_product_into_missing_category(categories, products, kitchen) -> None:
    created = CreateProductUseCase(products=products, categories=categories).execute(
        _draft(kitchen.id)
    )

    result = UpdateProductUseCase(products=products, categories=categories).execute(
        created.value.id, {"category_id": 42}
    )

    assert isinstance(result, Err)
    assert result.error.code == "category_not_found"


def test_missing_product_is_not_found(products) -> None:
    assert GetProductUseCase(products).execute(1) == Err(ProductNotFoundError())
    assert DeleteProductUseCase(products).execute(1) == Err(ProductNotFoundError())


def test_category_in_use_cannot_be_deleted(categories, products, kitchen) -> None:
    CreateProductUseCase(products=products, categories=categories).execute(_draft(kitchen.id))
    delete = DeleteCategoryUseCase(categories=categories, products=products)

    result = delete.execute(kitchen.id)

    assert isinstance(result, Err)
    assert isinstance(result.error, CategoryInUseError)
    assert categories.find_by_id(kitchen.id) is not None


def test_empty_category_is_deleted(categories, products, kitchen) -> None:
    result = DeleteCategoryUseCase(categories=categories, products=products).execute(kitchen.id)

    assert result == Ok(None)
    assert categories.find_by_id(kitchen.id) is None


def test_update_category_keeps_unsent_fields(categories, kitchen) -> None:
    result = UpdateCategoryUseCase(categories).execute(kitchen.id, description="Cookware")

    assert result.value.name == "Kitchen"
    assert result.value.description == "Cookware"


def test_list_categories_pages(categories) -> None:
    create = CreateCategoryUseCase(categories)
    for name in ("A", "B", "C"):
        create.execute(name)

    page = ListCategoriesUseCase(categories).execute(PageRequest(page=1, limit=2)).value

    assert [c.name for c in page.items] == ["A", "B"]
    assert page.pages == 2
