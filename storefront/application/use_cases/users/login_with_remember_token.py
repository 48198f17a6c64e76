# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for exchanging a remember token for a fresh session token."""

from __future__ import annotations

from storefront.application.interfaces import TokenIssuer
from storefront.application.results import Err, Ok, Result
from storefront.application.use_cases.users.login_user import LoginOutcome
from storefront.domain.users.exceptions import InvalidCredentialsError
from storefront.domain.users.repositories import RememberTokenRepository


class LoginWithRememberTokenUseCase:
    def __init__(
        self,
        *,
        remember_tokens: RememberTokenRepository,
        token_issuer: TokenIssuer,
    ) -> None:
        self._remember_tokens = remember_tokens
        self._token_issuer = token_issuer

    def execute(self, remember_token: str) -> Result[LoginOutcome]:
        if not remember_token:
            return Err(InvalidCredentialsError())

        user = self._remember_tokens.consume(remember_token)
        if user is None:
            return Err(InvalidCredentialsError())

        self._remember_tokens.extend_validity(remember_token)
        return Ok(LoginOutcome(user=user, token=self._token_issuer.issue(user.id)))
