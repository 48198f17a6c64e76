# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime, timedelta

from storefront.application.results import Err, Ok, Result
from storefront.domain.users.entities import User
from storefront.domain.users.exceptions import ResetCodeExpiredError, UserNotFoundError
from storefront.domain.users.repositories import PasswordHasher, UserRepository

RESET_CODE_TTL = timedelta(hours=1)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ChangePasswordUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
        code_ttl: timedelta = RESET_CODE_TTL,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher
        self._code_ttl = code_ttl
        self._clock = clock

    def execute(self, email: str, code: str, new_password: str) -> Result[User]:
        # Unknown email and wrong code are reported the same way.
        user = self._users.find_by_email_and_code(email, code) if code else None
        if user is None:
            return Err(UserNotFoundError())

        if user.reset_code_expired(self._clock(), self._code_ttl):
            return Err(ResetCodeExpiredError())

        updated = self._users.save(
            replace(
                user,
                password_hash=self._password_hasher.hash(new_password),
                forgot_code=None,
                forgot_generated=None,
            )
        )
        return Ok(updated)
