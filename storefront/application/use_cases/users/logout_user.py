# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for revoking remember tokens."""

from __future__ import annotations

from storefront.application.results import Ok, Result
from storefront.domain.users.entities import Caller
from storefront.domain.users.repositories import RememberTokenRepository


class LogoutUserUseCase:
    def __init__(self, *, remember_tokens: RememberTokenRepository) -> None:
        self._remember_tokens = remember_tokens

    def execute(self, caller: Caller, remember_token: str | None = None) -> Result[None]:
        if remember_token:
            self._remember_tokens.revoke(remember_token, caller.user_id)
        return Ok(None)
