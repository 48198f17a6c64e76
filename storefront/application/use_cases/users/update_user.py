# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import replace

from storefront.application.results import Err, Ok, Result
from storefront.domain.users.entities import Caller, User
from storefront.domain.users.exceptions import (
    UserAlreadyExistsError,
    UserNotFoundError,
    UserUpdateForbiddenError,
)
from storefront.domain.users.repositories import UserRepository


class UpdateUserUseCase:
    def __init__(self, *, users: UserRepository) -> None:
        self._users = users

    def execute(
        self,
        caller: Caller,
        user_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
    ) -> Result[User]:
        """Update profile fields. Users edit themselves; admins edit anyone."""
        if caller.user_id != user_id and not caller.is_admin:
            return Err(UserUpdateForbiddenError())

        user = self._users.find_by_id(user_id)
        if user is None:
            return Err(UserNotFoundError())

        changes: dict[str, str] = {}
        if name is not None:
            changes["name"] = name
        if email is not None and email != user.email:
            other = self._users.find_by_email(email)
            if other is not None and other.id != user.id:
                return Err(UserAlreadyExistsError())
            changes["email"] = email

        if not changes:
            return Ok(user)
        return Ok(self._users.save(replace(user, **changes)))
