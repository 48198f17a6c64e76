# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, model_validator

from storefront.application.use_cases.catalog.products import ProductDraft
from storefront.domain.catalog.entities import Category, Product


class CategoryDTO(BaseModel):
    id: int
    name: str
    description: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, category: Category) -> CategoryDTO:
        return cls(
            id=category.id,
            name=category.name,
            description=category.description,
            created_at=category.created_at,
        )


class CreateCategoryRequestDTO(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    description: str | None = Field(None, max_length=2000)


class UpdateCategoryRequestDTO(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=128)
    description: str | None = Field(None, max_length=2000)


class ProductDTO(BaseModel):
    id: int
    name: str
    description: str
    category_id: int
    full_price: float
    sale_price: float
    photo: str
    quantity: int
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, product: Product) -> ProductDTO:
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            category_id=product.category_id,
            full_price=product.full_price,
            sale_price=product.sale_price,
            photo=product.photo,
            quantity=product.quantity,
            created_at=product.created_at,
        )


class CreateProductRequestDTO(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1, max_length=5000)
    category_id: int = Field(ge=1)
    full_price: float = Field(ge=0)
    photo: str = Field(min_length=1, max_length=512)
    quantity: int = Field(ge=0)

    def to_draft(self) -> ProductDraft:
        return ProductDraft(**self.model_dump())


class UpdateProductRequestDTO(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1, max_length=5000)
    category_id: int | None = Field(None, ge=1)
    full_price: float | None = Field(None, ge=0)
    sale_price: float | None = Field(None, ge=0)
    photo: str | None = Field(None, min_length=1, max_length=512)
    quantity: int | None = Field(None, ge=0)

    @model_validator(mode="after")
    def require_any_field(self) -> UpdateProductRequestDTO:
        if not self.changes():
            raise ValueError("at least one field is required")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
