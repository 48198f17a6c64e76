# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from storefront.application.results import Err, Ok, Result
from storefront.domain.users.entities import User
from storefront.domain.users.exceptions import UserNotFoundError
from storefront.domain.users.repositories import UserRepository


class GetUserUseCase:
    def __init__(self, users: UserRepository) -> None:
        self._users = users

    def execute(self, user_id: int) -> Result[User]:
        user = self._users.find_by_id(user_id)
        if user is None:
            return Err(UserNotFoundError())
        return Ok(user)


__all__ = ["GetUserUseCase"]
