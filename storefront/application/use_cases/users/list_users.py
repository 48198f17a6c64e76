# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from storefront.application.pagination import Page, PageRequest
from storefront.application.results import Ok, Result
from storefront.domain.users.entities import User
from storefront.domain.users.repositories import UserRepository


class ListUsersUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, request: PageRequest) -> Result[Page[User]]:
        items, total = self._users.list_page(request.offset, request.limit)
        return Ok(Page(items=items, total=total, request=request))


__all__ = ["ListUsersUseCase"]
