# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar


@dataclass(slots=True)
class AppError(Exception):
    """Failure reported to the client as ``{"success": false, "error": <code>}``."""

    code: str
    status: HTTPStatus = HTTPStatus.BAD_REQUEST
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": False, "error": self.code}
        if self.context:
            body["context"] = dict(self.context)
        return body


class DomainError(AppError):
    """Business-rule failure; subclasses pin the code and status on the class."""

    error_code: ClassVar[str] = "domain_error"
    http_status: ClassVar[HTTPStatus] = HTTPStatus.BAD_REQUEST

    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(self.error_code, self.http_status, context)


class NotFoundError(DomainError):
    error_code = "not_found"
    http_status = HTTPStatus.NOT_FOUND


class ConflictError(DomainError):
    error_code = "conflict"
    http_status = HTTPStatus.CONFLICT


class UnauthorizedError(DomainError):
    error_code = "unauthorized"
    http_status = HTTPStatus.UNAUTHORIZED


class ForbiddenError(DomainError):
    error_code = "forbidden"
    http_status = HTTPStatus.FORBIDDEN


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code, status, context)


class FrameworkError(InfrastructureError):
    """Unexpected fault; the client only sees ``internal_error``."""

    def __init__(self) -> None:
        super().__init__("internal_error")


class ValidationError(AppError):
    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__("validation_error", HTTPStatus.UNPROCESSABLE_ENTITY, context)


class RateLimitedError(AppError):
    def __init__(self, retry_after: float) -> None:
        super().__init__(
            "rate_limited",
            HTTPStatus.TOO_MANY_REQUESTS,
            {"retry_after_seconds": round(retry_after, 1)},
        )
