# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from storefront.shared.errors.base import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)


class UserAlreadyExistsError(ConflictError):
    error_code = "user_already_exists"


class InvalidCredentialsError(UnauthorizedError):
    error_code = "invalid_credentials"


class UserNotFoundError(NotFoundError):
    error_code = "user_not_found"


class ResetCodeExpiredError(DomainError):
    error_code = "code_expired"


class UserUpdateForbiddenError(ForbiddenError):
    error_code = "user_update_forbidden"


class InvalidSessionTokenError(UnauthorizedError):
    error_code = "invalid_token"


class SessionTokenExpiredError(UnauthorizedError):
    error_code = "token_expired"
