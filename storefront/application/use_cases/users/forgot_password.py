# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime

from storefront.application.interfaces import ResetCodeNotifier
from storefront.application.results import Ok, Result
from storefront.application.services.reset_codes import generate_reset_code
from storefront.domain.users.repositories import UserRepository


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ForgotPasswordUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        notifier: ResetCodeNotifier,
        code_length: int = 6,
        code_generator: Callable[[int], str] = generate_reset_code,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._notifier = notifier
        self._code_length = code_length
        self._code_generator = code_generator
        self._clock = clock

    def execute(self, email: str) -> Result[bool]:
        """Issue a reset code; ``Ok(False)`` when no account uses ``email``.

        The caller must not reveal the difference to the client.
        """
        user = self._users.find_by_email(email)
        if user is None:
            return Ok(False)

        code = self._code_generator(self._code_length)
        user = self._users.save(
            replace(user, forgot_code=code, forgot_generated=self._clock())
        )
        self._notifier.send(user, code)
        return Ok(True)
