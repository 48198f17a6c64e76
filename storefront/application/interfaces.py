# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from storefront.application.results import Result
from storefront.domain.users.entities import SessionClaims, User


class TokenIssuer(Protocol):
    def issue(self, user_id: int) -> str: ...

    def verify(self, token: str) -> Result[SessionClaims]: ...


class ResetCodeNotifier(Protocol):
    def send(self, user: User, code: str) -> None: ...
