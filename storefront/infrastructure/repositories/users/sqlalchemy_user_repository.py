# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta

from sqlalchemy import func, select

from storefront.domain.users.entities import TOKEN_TYPE_REMEMBER, as_utc
from storefront.domain.users.entities import RememberToken as DomainRememberToken
from storefront.domain.users.entities import User as DomainUser
from storefront.domain.users.exceptions import UserNotFoundError
from storefront.domain.users.repositories import RememberTokenRepository, UserRepository
from storefront.infrastructure.db.models import User, UserToken
from storefront.infrastructure.db.session import session_scope


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        name=row.name,
        password_hash=row.password_hash,
        is_admin=bool(row.is_admin),
        forgot_code=row.forgot_code,
        forgot_generated=as_utc(row.forgot_generated) if row.forgot_generated else None,
        created_at=as_utc(row.created_at) if row.created_at else None,
    )


class SqlAlchemyUserRepository(UserRepository):
    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.query(User).filter(User.email == email).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def find_by_email_and_code(self, email: str, code: str) -> DomainUser | None:
        with session_scope() as session:
            row = (
                session.query(User)
                .filter(User.email == email, User.forgot_code == code)
                .first()
            )
            return _to_domain(row) if row else None

    def list_page(self, offset: int, limit: int) -> tuple[Sequence[DomainUser], int]:
        with session_scope() as session:
            total = session.scalar(select(func.count()).select_from(User)) or 0
            rows = session.scalars(
                select(User).order_by(User.id.asc()).offset(offset).limit(limit)
            ).all()
            return [_to_domain(row) for row in rows], int(total)

    def add(self, user: DomainUser) -> DomainUser:
        with session_scope() as session:
            row = User(
                email=user.email,
                name=user.name,
                password_hash=user.password_hash,
                is_admin=user.is_admin,
            )
            if user.created_at is not None:
                row.created_at = user.created_at
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def save(self, user: DomainUser) -> DomainUser:
        with session_scope() as session:
            row = session.get(User, user.id)
            if row is None:
                raise UserNotFoundError()
            row.email = user.email
            row.name = user.name
            row.password_hash = user.password_hash
            row.is_admin = user.is_admin
            row.forgot_code = user.forgot_code
            row.forgot_generated = user.forgot_generated
            session.flush()
            return _to_domain(row)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SqlAlchemyRememberTokenRepository(RememberTokenRepository):
    """Remember tokens stored in ``user_tokens``.

    Only tokens of type ``remember`` whose expiry lies in the future are
    honoured. Each successful use pushes the expiry out by ``validity``.
    """

    def __init__(
        self,
        validity: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._validity = validity
        self._clock = clock

    def generate(self, user_id: int) -> DomainRememberToken:
        expires_at = self._clock() + self._validity
        with session_scope() as session:
            token_value = secrets.token_urlsafe(48)
            while session.query(UserToken.id).filter(UserToken.token == token_value).first():
                token_value = secrets.token_urlsafe(48)
            session.add(
                UserToken(
                    user_id=user_id,
                    token=token_value,
                    type=TOKEN_TYPE_REMEMBER,
                    expires_at=expires_at,
                )
            )
        return DomainRememberToken(user_id=user_id, token=token_value, expires_at=expires_at)

    def consume(self, token: str) -> DomainUser | None:
        with session_scope() as session:
            row = (
                session.query(UserToken)
                .filter(UserToken.token == token, UserToken.type == TOKEN_TYPE_REMEMBER)
                .first()
            )
            if row is None:
                return None
            remembered = DomainRememberToken(
                user_id=row.user_id,
                token=row.token,
                expires_at=row.expires_at,
                type=row.type,
            )
            if not remembered.is_valid(self._clock()):
                return None
            user = session.get(User, row.user_id)
            return _to_domain(user) if user else None

    def extend_validity(self, token: str) -> None:
        with session_scope() as session:
            session.query(UserToken).filter(
                UserToken.token == token, UserToken.type == TOKEN_TYPE_REMEMBER
            ).update(
                {UserToken.expires_at: self._clock() + self._validity},
                synchronize_session=False,
            )

    def revoke(self, token: str, user_id: int) -> None:
        with session_scope() as session:
            session.query(UserToken).filter(
                UserToken.token == token,
                UserToken.user_id == user_id,
                UserToken.type == TOKEN_TYPE_REMEMBER,
            ).delete(synchronize_session=False)
