# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re

from pydantic import BaseModel, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from storefront.application.pagination import PageRequest

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError(
            "email_invalid",
            "Email address is not valid",
            {"pattern": EMAIL_PATTERN.pattern},
        )
    return value


class PaginationQueryDTO(BaseModel):
    page: int = Field(1, ge=1)
    limit: int | None = Field(None, ge=1)

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, value: int | None, info: ValidationInfo) -> int | None:
        max_limit = (info.context or {}).get("max_limit")
        if value is not None and max_limit is not None and value > max_limit:
            raise PydanticCustomError(
                "limit_too_large",
                "Limit must not exceed {max_limit}",
                {"max_limit": max_limit},
            )
        return value

    def to_page_request(self, default_limit: int) -> PageRequest:
        return PageRequest(page=self.page, limit=self.limit or default_limit)
