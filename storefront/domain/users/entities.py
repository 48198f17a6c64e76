# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

TOKEN_TYPE_REMEMBER = "remember"


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(slots=True, frozen=True)
class User:

    id: int
    email: str
    name: str
    password_hash: str
    is_admin: bool = False
    forgot_code: str | None = None
    forgot_generated: datetime | None = None
    created_at: datetime | None = None

    def reset_code_expired(self, now: datetime, ttl: timedelta) -> bool:
        """A code is stale once more than ``ttl`` has passed since it was issued."""
        if self.forgot_generated is None:
            return True
        return as_utc(self.forgot_generated) + ttl < now


@dataclass(slots=True, frozen=True)
class RememberToken:

    user_id: int
    token: str
    expires_at: datetime
    type: str = TOKEN_TYPE_REMEMBER

    def is_valid(self, now: datetime) -> bool:
        return self.type == TOKEN_TYPE_REMEMBER and as_utc(self.expires_at) > now


@dataclass(slots=True, frozen=True)
class SessionClaims:

    user_id: int
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class Caller:
    """The verified identity behind an authenticated request."""

    user_id: int
    is_admin: bool = False
