# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from storefront.shared.logging import logger, sanitize_message

_SENSITIVE_KEYS = ("password", "token", "code", "secret", "key")


class AuditAction(str, Enum):
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGIN_REMEMBERED = "login_remembered"
    LOGOUT = "logout"
    PASSWORD_RESET_REQUESTED = "password_reset_requested"
    PASSWORD_CHANGED = "password_changed"
    PASSWORD_CHANGE_FAILED = "password_change_failed"
    USER_CREATED = "user_created"
    USER_UPDATED = "user_updated"
    ADMIN_GRANTED = "admin_granted"


def _sanitize_value(key: str, value: Any) -> Any:
    if any(s in key.lower() for s in _SENSITIVE_KEYS):
        return "***REDACTED***"
    if isinstance(value, str):
        return sanitize_message(value)
    return value


def _sanitize_details(details: dict[str, Any]) -> dict[str, Any]:
    return {key: _sanitize_value(key, value) for key, value in details.items()}


def audit_log(
    action: AuditAction,
    user_id: int | None = None,
    ip_address: str | None = None,
    details: dict[str, Any] | None = None,
    success: bool = True,
) -> None:
    """Write an audit line to the log and persist it to ``audit_logs``.

    Storage failures are logged and never break the request being audited.
    """
    safe_details = _sanitize_details(details) if details else {}
    message = f"AUDIT: {action.value} | user_id={user_id} | ip={ip_address} | success={success}"
    if safe_details:
        message += f" | details={safe_details}"

    if success:
        logger.info(message)
    else:
        logger.warning(message)

    _store_audit_log(
        timestamp=datetime.now(UTC),
        action=action.value,
        user_id=user_id,
        ip_address=ip_address,
        success=success,
        details=safe_details,
    )


def _store_audit_log(
    timestamp: datetime,
    action: str,
    user_id: int | None,
    ip_address: str | None,
    success: bool,
    details: dict[str, Any],
) -> None:
    from storefront.infrastructure.db.models import AuditLog
    from storefront.infrastructure.db.session import SessionLocal

    db = SessionLocal()
    try:
        db.add(
            AuditLog(
                timestamp=timestamp,
                action=action,
                user_id=user_id,
                ip_address=ip_address,
                success=success,
                details_json=json.dumps(details) if details else None,
            )
        )
        db.commit()
    except SQLAlchemyError as db_error:
        db.rollback()
        logger.warning(f"Failed to store audit log in database: {db_error}")
    finally:
        db.close()


__all__ = ["AuditAction", "audit_log"]
