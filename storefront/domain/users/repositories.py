# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import RememberToken, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: int) -> User | None: ...
    def find_by_email_and_code(self, email: str, code: str) -> User | None: ...
    def list_page(self, offset: int, limit: int) -> tuple[Sequence[User], int]: ...
    def add(self, user: User) -> User: ...
    def save(self, user: User) -> User: ...


class RememberTokenRepository(Protocol):
    def generate(self, user_id: int) -> RememberToken: ...
    def consume(self, token: str) -> User | None: ...
    def extend_validity(self, token: str) -> None: ...
    def revoke(self, token: str, user_id: int) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...
