from .base import (
    AppError,
    ConflictError,
    DomainError,
    ForbiddenError,
    FrameworkError,
    InfrastructureError,
    NotFoundError,
    RateLimitedError,
    UnauthorizedError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler
from .validation import format_pydantic_errors, raise_validation_error

__all__ = [
    "AppError",
    "ConflictError",
    "DomainError",
    "ForbiddenError",
    "FrameworkError",
    "InfrastructureError",
    "NotFoundError",
    "RateLimitedError",
    "UnauthorizedError",
    "ValidationError",
    "format_pydantic_errors",
    "handle_app_error",
    "raise_validation_error",
    "register_error_handler",
]
