# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import normalize_email
from .users import UserDTO

PASSWORD_MIN_LENGTH = 8


class LoginRequestDTO(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=128)
    remember: bool = False

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)


class RememberLoginRequestDTO(BaseModel):
    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True)

    remember_token: str = Field(alias="rememberToken", min_length=1, max_length=256)


class LogoutRequestDTO(BaseModel):
    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True)

    remember_token: str | None = Field(None, alias="rememberToken", max_length=256)


class ForgotPasswordRequestDTO(BaseModel):
    email: str = Field(min_length=3, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)


class ChangePasswordRequestDTO(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    code: str = Field(min_length=1, max_length=32)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    @field_validator("code")
    @classmethod
    def strip_code(cls, value: str) -> str:
        return value.strip()


class LoginResponseDTO(BaseModel):
    user: UserDTO
    token: str
    remember_token: str | None = Field(None, serialization_alias="rememberToken")
