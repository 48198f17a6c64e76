# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Bearer-token authentication for Flask views.

``protect`` and ``protect_admin`` wrap a view, verify the session token and
pass the verified identity to the view as its ``caller`` keyword argument.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from flask import g, request

from storefront.application.interfaces import TokenIssuer
from storefront.application.results import Err
from storefront.domain.users.entities import Caller
from storefront.domain.users.exceptions import InvalidSessionTokenError
from storefront.domain.users.repositories import UserRepository
from storefront.shared.errors.base import ForbiddenError, UnauthorizedError
from storefront.shared.logging import logger


class AuthenticationRequiredError(UnauthorizedError):
    error_code = "authentication_required"


class AdminAccessDeniedError(ForbiddenError):
    error_code = "admin_access_denied"


def _bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, value = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not value.strip():
        return None
    return value.strip()


class RequestAuthenticator:
    def __init__(
        self,
        *,
        token_issuer: TokenIssuer,
        users: UserRepository,
        admin_requires_flag: bool = True,
    ) -> None:
        self._token_issuer = token_issuer
        self._users = users
        self._admin_requires_flag = admin_requires_flag

    def authenticate(self) -> Caller:
        token = _bearer_token()
        if token is None:
            raise AuthenticationRequiredError()

        verified = self._token_issuer.verify(token)
        if isinstance(verified, Err):
            raise verified.error

        user = self._users.find_by_id(verified.value.user_id)
        if user is None:
            logger.warning(f"auth: token for missing user {verified.value.user_id}")
            raise InvalidSessionTokenError()

        is_admin = user.is_admin or not self._admin_requires_flag
        return Caller(user_id=user.id, is_admin=is_admin)

    def protect(self, view: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            caller = self.authenticate()
            g.user_id = caller.user_id
            return view(*args, caller=caller, **kwargs)

        return wrapper

    def protect_admin(self, view: Callable[..., Any]) -> Callable[..., Any]:
        @wraps(view)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            caller = self.authenticate()
            g.user_id = caller.user_id
            if not caller.is_admin:
                logger.warning(
                    f"Admin access denied: user {caller.user_id} on {request.method} {request.path}"
                )
                raise AdminAccessDeniedError()
            return view(*args, caller=caller, **kwargs)

        return wrapper


__all__ = [
    "AdminAccessDeniedError",
    "AuthenticationRequiredError",
    "RequestAuthenticator",
]
