# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass

from storefront.application.interfaces import TokenIssuer
from storefront.application.results import Err, Ok, Result
from storefront.domain.users.entities import User
from storefront.domain.users.exceptions import InvalidCredentialsError
from storefront.domain.users.repositories import (
    PasswordHasher,
    RememberTokenRepository,
    UserRepository,
)

_TIMING_DUMMY_PASSWORD = "storefront_timing_dummy"


@dataclass(slots=True, frozen=True)
class LoginOutcome:
    user: User
    token: str
    remember_token: str | None = None


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        remember_tokens: RememberTokenRepository,
        password_hasher: PasswordHasher,
        token_issuer: TokenIssuer,
    ) -> None:
        self._users = users
        self._remember_tokens = remember_tokens
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer
        # Unknown emails still pay for one hash check.
        self._dummy_hash = password_hasher.hash(_TIMING_DUMMY_PASSWORD)

    def execute(self, email: str, password: str, remember: bool = False) -> Result[LoginOutcome]:
        user = self._users.find_by_email(email)
        if user is None:
            self._password_hasher.verify(password, self._dummy_hash)
            return Err(InvalidCredentialsError())

        if not self._password_hasher.verify(password, user.password_hash):
            return Err(InvalidCredentialsError())

        token = self._token_issuer.issue(user.id)
        remember_token = None
        if remember:
            remember_token = self._remember_tokens.generate(user.id).token

        return Ok(LoginOutcome(user=user, token=token, remember_token=remember_token))
