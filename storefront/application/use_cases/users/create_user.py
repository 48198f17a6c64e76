# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from storefront.application.results import Err, Ok, Result
from storefront.application.services.reset_codes import generate_unusable_password
from storefront.domain.users.entities import User
from storefront.domain.users.exceptions import UserAlreadyExistsError
from storefront.domain.users.repositories import PasswordHasher, UserRepository


class CreateUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(
        self,
        name: str,
        email: str,
        password: str | None = None,
        is_admin: bool = False,
    ) -> Result[User]:
        if self._users.find_by_email(email):
            return Err(UserAlreadyExistsError())
        # Without a password the account is only reachable through forgot-password.
        hashed = self._password_hasher.hash(password or generate_unusable_password())
        user = User(
            id=0,
            email=email,
            name=name,
            password_hash=hashed,
            is_admin=is_admin,
            created_at=datetime.now(UTC),
        )
        return Ok(self._users.add(user))
