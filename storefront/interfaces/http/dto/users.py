# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from storefront.domain.users.entities import User

from .common import normalize_email


class UserDTO(BaseModel):
    """Public view of a user. Never carries the hash or reset fields."""

    id: int
    email: str
    name: str
    is_admin: bool
    created_at: datetime | None = None

    @classmethod
    def from_entity(cls, user: User) -> UserDTO:
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            is_admin=user.is_admin,
            created_at=user.created_at,
        )


class CreateUserRequestDTO(BaseModel):
    name: str = Field(min_length=1, max_length=128)
    email: str = Field(min_length=3, max_length=255)
    password: str | None = Field(None, min_length=8, max_length=128)
    is_admin: bool = False

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        return value.strip()


class UpdateUserRequestDTO(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=128)
    email: str | None = Field(None, min_length=3, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str | None) -> str | None:
        return normalize_email(value) if value is not None else None

    @model_validator(mode="after")
    def require_any_field(self) -> UpdateUserRequestDTO:
        if self.name is None and self.email is None:
            raise ValueError("at least one of name or email is required")
        return self
