from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from storefront.application.pagination import PageRequest
from storefront.application.results import Err, Ok, Result
from storefront.application.use_cases.users.change_password import ChangePasswordUseCase
from storefront.application.use_cases.users.create_user import CreateUserUseCase
from storefront.application.use_cases.users.forgot_password import ForgotPasswordUseCase
from storefront.application.use_cases.users.get_user import GetUserUseCase
from storefront.application.use_cases.users.list_users import ListUsersUseCase
from storefront.application.use_cases.users.login_user import LoginUserUseCase
from storefront.application.use_cases.users.login_with_remember_token import (
    LoginWithRememberTokenUseCase,
)
from storefront.application.use_cases.users.logout_user import LogoutUserUseCase
from storefront.application.use_cases.users.update_user import UpdateUserUseCase
from storefront.domain.users.entities import Caller, RememberToken, SessionClaims, User
from storefront.domain.users.exceptions import (
    InvalidCredentialsError,
    ResetCodeExpiredError,
    UserAlreadyExistsError,
    UserNotFoundError,
    UserUpdateForbiddenError,
)
from storefront.domain.users.repositories import (
    PasswordHasher,
    RememberTokenRepository,
    UserRepository,
)

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[int, User] = {}
        self._seq = 1

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._users.get(user_id)

    def find_by_email_and_code(self, email: str, code: str) -> User | None:
        user = self.find_by_email(email)
        if user is None or user.forgot_code != code:
            return None
        return user

    def list_page(self, offset: int, limit: int) -> tuple[Sequence[User], int]:
        users = sorted(self._users.values(), key=lambda u: u.id)
        return users[offset : offset + limit], len(users)

    def add(self, user: User) -> User:
        stored = replace(user, id=self._seq)
        self._seq += 1
        self._users[stored.id] = stored
        return stored

    def save(self, user: User) -> User:
        self._users[user.id] = user
        return user


class InMemoryRememberTokenRepository(RememberTokenRepository):
    def __init__(self, users: InMemoryUserRepository) -> None:
        self._users = users
        self._tokens: dict[str, RememberToken] = {}
        self.extended: list[str] = []

    def generate(self, user_id: int) -> RememberToken:
        token = RememberToken(
            user_id=user_id,
            token=f"remember-{len(self._tokens) + 1}",
            expires_at=NOW + timedelta(days=7),
        )
        self._tokens[token.token] = token
        return token

    def consume(self, token: str) -> User | None:
        stored = self._tokens.get(token)
        if stored is None or not stored.is_valid(NOW):
            return None
        return self._users.find_by_id(stored.user_id)

    def extend_validity(self, token: str) -> None:
        self.extended.append(token)

    def revoke(self, token: str, user_id: int) -> None:
        stored = self._tokens.get(token)
        if stored is not None and stored.user_id == user_id:
            del self._tokens[token]


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.verified: list[tuple[str, str]] = []

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verified.append((password, hashed))
        return hashed == f"hashed:{password}"


class StubTokenIssuer:
    def issue(self, user_id: int) -> str:
        return f"session-{user_id}"

    def verify(self, token: str) -> Result[SessionClaims]:
        return Ok(SessionClaims(user_id=int(token.rsplit("-", 1)[1]), expires_at=NOW))


class RecordingNotifier:
    def __init__(self) -> None:
        self.sent: list[tuple[User, str]] = []

    def send(self, user: User, code: str) -> None:
        self.sent.append((user, code))


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def remember_tokens(users: InMemoryUserRepository) -> InMemoryRememberTokenRepository:
    return InMemoryRememberTokenRepository(users)


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def alice(users: InMemoryUserRepository, hasher: DeterministicHasher) -> User:
    created = CreateUserUseCase(users=users, password_hasher=hasher).execute(
        "Alice", "alice@example.com", "secret123"
    )
    assert isinstance(created, Ok)
    return created.value


def _login(users, remember_tokens, hasher) -> LoginUserUseCase:
    return LoginUserUseCase(
        users=users,
        remember_tokens=remember_tokens,
        password_hasher=hasher,
        token_issuer=StubTokenIssuer(),
    )


def test_login_returns_session_token_for_user(users, remember_tokens, hasher, alice) -> None:
    result = _login(users, remember_tokens, hasher).execute("alice@example.com", "secret123")

    assert isinstance(result, Ok)
    assert result.value.user.id == alice.id
    assert result.value.token == f"session-{alice.id}"
    assert result.value.remember_token is None


def test_login_with_remember_mints_remember_token(users, remember_tokens, hasher, alice) -> None:
    result = _login(users, remember_tokens, hasher).execute(
        "alice@example.com", "secret123", remember=True
    )

    assert isinstance(result, Ok)
    assert result.value.remember_token == "remember-1"
    assert remember_tokens.consume("remember-1") == alice


def test_wrong_password_and_unknown_email_fail_the_same_way(
    users, remember_tokens, hasher, alice
) -> None:
    login = _login(users, remember_tokens, hasher)

    wrong_password = login.execute("alice@example.com", "nope")
    unknown_email = login.execute("nobody@example.com", "secret123")

    assert isinstance(wrong_password, Err)
    assert isinstance(unknown_email, Err)
    assert isinstance(wrong_password.error, InvalidCredentialsError)
    assert wrong_password.error.to_dict() == unknown_email.error.to_dict()


def test_unknown_email_still_checks_a_hash(users, remember_tokens, hasher) -> None:
    _login(users, remember_tokens, hasher).execute("nobody@example.com", "secret123")

    assert len(hasher.verified) == 1


def test_remember_token_login_issues_fresh_session(users, remember_tokens, hasher, alice) -> None:
    token = remember_tokens.generate(alice.id).token
    use_case = LoginWithRememberTokenUseCase(
        remember_tokens=remember_tokens, token_issuer=StubTokenIssuer()
    )

    result = use_case.execute(token)

    assert isinstance(result, Ok)
    assert result.value.user == alice
    assert result.value.token == f"session-{alice.id}"
    assert remember_tokens.extended == [token]
    assert hasher.verified == []


@pytest.mark.parametrize("token", ["", "does-not-exist"])
def test_remember_token_login_rejects_unknown_token(remember_tokens, token: str) -> None:
    use_case = LoginWithRememberTokenUseCase(
        remember_tokens=remember_tokens, token_issuer=StubTokenIssuer()
    )

    result = use_case.execute(token)

    assert isinstance(result, Err)
    assert result.error.code == "invalid_credentials"


def test_logout_revokes_only_callers_token(remember_tokens, alice) -> None:
    token = remember_tokens.generate(alice.id).token
    logout = LogoutUserUseCase(remember_tokens=remember_tokens)

    assert isinstance(logout.execute(Caller(user_id=alice.id + 1), token), Ok)
    assert remember_tokens.consume(token) == alice

    assert isinstance(logout.execute(Caller(user_id=alice.id), token), Ok)
    assert remember_tokens.consume(token) is None


def test_logout_without_token_succeeds(remember_tokens, alice) -> None:
    result = LogoutUserUseCase(remember_tokens=remember_tokens).execute(Caller(user_id=alice.id))

    assert isinstance(result, Ok)


def test_forgot_password_stamps_code_and_notifies(users, alice) -> None:
    notifier = RecordingNotifier()
    use_case = ForgotPasswordUseCase(users=users, notifier=notifier, clock=lambda: NOW)

    result = use_case.execute("alice@example.com")

    stored = users.find_by_id(alice.id)
    assert result == Ok(True)
    assert stored is not None
    assert stored.forgot_code is not None and len(stored.forgot_code) == 6
    assert stored.forgot_code.isalnum()
    assert stored.forgot_generated == NOW
    assert notifier.sent == [(stored, stored.forgot_code)]


def test_forgot_password_unknown_email_is_silent(users) -> None:
    notifier = RecordingNotifier()
    use_case = ForgotPasswordUseCase(users=users, notifier=notifier)

    assert use_case.execute("nobody@example.com") == Ok(False)
    assert notifier.sent == []


def _with_code(users: InMemoryUserRepository, user: User, issued_ago: timedelta) -> User:
    return users.save(replace(user, forgot_code="ABC123", forgot_generated=NOW - issued_ago))


def _change_password(users, hasher) -> ChangePasswordUseCase:
    return ChangePasswordUseCase(users=users, password_hasher=hasher, clock=lambda: NOW)


def test_change_password_within_an_hour_succeeds(users, hasher, alice) -> None:
    _with_code(users, alice, timedelta(minutes=59))

    result = _change_password(users, hasher).execute("alice@example.com", "ABC123", "newpass99")

    stored = users.find_by_id(alice.id)
    assert isinstance(result, Ok)
    assert stored is not None
    assert stored.password_hash == "hashed:newpass99"
    assert stored.forgot_code is None
    assert stored.forgot_generated is None


def test_change_password_after_an_hour_is_expired(users, hasher, alice) -> None:
    _with_code(users, alice, timedelta(minutes=61))

    result = _change_password(users, hasher).execute("alice@example.com", "ABC123", "newpass99")

    assert isinstance(result, Err)
    assert isinstance(result.error, ResetCodeExpiredError)
    assert users.find_by_id(alice.id).password_hash == "hashed:secret123"


def test_change_password_wrong_code_matches_unknown_email(users, hasher, alice) -> None:
    _with_code(users, alice, timedelta(minutes=5))
    use_case = _change_password(users, hasher)

    wrong_code = use_case.execute("alice@example.com", "ZZZ999", "newpass99")
    unknown_email = use_case.execute("nobody@example.com", "ABC123", "newpass99")

    assert isinstance(wrong_code, Err) and isinstance(unknown_email, Err)
    assert isinstance(wrong_code.error, UserNotFoundError)
    assert wrong_code.error.to_dict() == unknown_email.error.to_dict()


def test_forgot_then_change_password_round_trip(users, hasher, alice) -> None:
    notifier = RecordingNotifier()
    ForgotPasswordUseCase(users=users, notifier=notifier, clock=lambda: NOW).execute(
        "alice@example.com"
    )
    _, code = notifier.sent[0]

    result = _change_password(users, hasher).execute("alice@example.com", code, "newpass99")

    assert isinstance(result, Ok)
    assert result.value.forgot_code is None
    assert _change_password(users, hasher).execute(
        "alice@example.com", code, "another99"
    ) == Err(UserNotFoundError())


def test_create_user_rejects_duplicate_email(users, hasher, alice) -> None:
    result = CreateUserUseCase(users=users, password_hasher=hasher).execute(
        "Other", "alice@example.com", "secret456"
    )

    assert isinstance(result, Err)
    assert isinstance(result.error, UserAlreadyExistsError)


def test_create_user_without_password_cannot_log_in(users, remember_tokens, hasher) -> None:
    created = CreateUserUseCase(users=users, password_hasher=hasher).execute(
        "Bob", "bob@example.com"
    )

    assert isinstance(created, Ok)
    assert created.value.password_hash.startswith("hashed:")
    assert isinstance(_login(users, remember_tokens, hasher).execute("bob@example.com", ""), Err)


def test_get_user_missing_returns_not_found(users) -> None:
    result = GetUserUseCase(users).execute(404)

    assert isinstance(result, Err)
    assert result.error.code == "user_not_found"


def test_list_users_paginates(users, hasher) -> None:
    create = CreateUserUseCase(users=users, password_hasher=hasher)
    for index in range(5):
        create.execute(f"User {index}", f"user{index}@example.com", "secret123")

    result = ListUsersUseCase(users).execute(PageRequest(page=2, limit=2))

    assert isinstance(result, Ok)
    assert [u.email for u in result.value.items] == ["user2@example.com", "user3@example.com"]
    assert result.value.pagination() == {"page": 2, "limit": 2, "total": 5, "pages": 3}


def test_update_user_self_changes_name(users, alice) -> None:
    result = UpdateUserUseCase(users=users).execute(Caller(user_id=alice.id), alice.id, name="Al")

    assert isinstance(result, Ok)
    assert result.value.name == "Al"


def test_update_other_user_requires_admin(users, hasher, alice) -> None:
    bob = CreateUserUseCase(users=users, password_hasher=hasher).execute(
        "Bob", "bob@example.com", "secret123"
    ).value
    use_case = UpdateUserUseCase(users=users)

    denied = use_case.execute(Caller(user_id=bob.id), alice.id, name="Hacked")
    allowed = use_case.execute(Caller(user_id=bob.id, is_admin=True), alice.id, name="Alicia")

    assert isinstance(denied, Err)
    assert isinstance(denied.error, UserUpdateForbiddenError)
    assert isinstance(allowed, Ok)
    assert allowed.value.name == "Alicia"


def test_update_user_rejects_taken_email(users, hasher, alice) -> None:
    CreateUserUseCase(users=users, password_hasher=hasher).execute(
        "Bob", "bob@example.com", "secret123"
    )

    result = UpdateUserUseCase(users=users).execute(
        Caller(user_id=alice.id), alice.id, email="bob@example.com"
    )

    assert isinstance(result, Err)
    assert result.error.code == "user_already_exists"
