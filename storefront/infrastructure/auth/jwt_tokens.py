# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed session tokens.

HS256 JWTs signed with SECRET_KEY carrying the user id and an expiry. No
server-side state is kept; a token is valid until ``exp`` passes.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from storefront.application.interfaces import TokenIssuer
from storefront.application.results import Err, Ok, Result
from storefront.domain.users.entities import SessionClaims
from storefront.domain.users.exceptions import (
    InvalidSessionTokenError,
    SessionTokenExpiredError,
)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class JoseTokenIssuer(TokenIssuer):
    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    def issue(self, user_id: int) -> str:
        now = self._clock()
        payload = {
            "id": user_id,
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> Result[SessionClaims]:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except ExpiredSignatureError:
            return Err(SessionTokenExpiredError())
        except JWTError:
            return Err(InvalidSessionTokenError())

        try:
            user_id = int(payload.get("id", payload["sub"]))
        except (KeyError, TypeError, ValueError):
            return Err(InvalidSessionTokenError())

        expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        return Ok(SessionClaims(user_id=user_id, expires_at=expires_at))


__all__ = ["JoseTokenIssuer"]
