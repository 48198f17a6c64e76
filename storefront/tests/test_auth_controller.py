from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from flask import Flask

from storefront.application.results import Err, Ok
from storefront.application.use_cases.users.login_user import LoginOutcome
from storefront.domain.users.entities import Caller, User
from storefront.domain.users.exceptions import (
    InvalidCredentialsError,
    ResetCodeExpiredError,
    UserNotFoundError,
)
from storefront.infrastructure.auth.jwt_tokens import JoseTokenIssuer
from storefront.infrastructure.auth_middleware import RequestAuthenticator
from storefront.interfaces.http.controllers.auth_controller import AuthController
from storefront.shared.middleware.error_handler import configure_error_handling

SECRET = "controller-test-secret-0123456789abcdef"
ALICE = User(
    id=1,
    email="alice@example.com",
    name="Alice",
    password_hash="hash",
    created_at=datetime(2025, 1, 1, tzinfo=UTC),
)


@pytest.fixture()
def issuer() -> JoseTokenIssuer:
    return JoseTokenIssuer(SECRET)


@pytest.fixture()
def use_cases() -> dict[str, MagicMock]:
    return {
        "login_use_case": MagicMock(),
        "remember_login_use_case": MagicMock(),
        "logout_use_case": MagicMock(),
        "forgot_password_use_case": MagicMock(),
        "change_password_use_case": MagicMock(),
    }


@pytest.fixture()
def flask_app(issuer: JoseTokenIssuer, use_cases: dict[str, MagicMock]) -> Flask:
    users = MagicMock()
    users.find_by_id.return_value = ALICE
    authenticator = RequestAuthenticator(token_issuer=issuer, users=users)
    controller = AuthController(authenticator=authenticator, **use_cases)

    app = Flask(__name__)
    configure_error_handling(app)
    app.register_blueprint(controller.as_blueprint())
    return app


def test_login_returns_user_and_token(flask_app: Flask, use_cases) -> None:
    use_cases["login_use_case"].execute.return_value = Ok(
        LoginOutcome(user=ALICE, token="jwt-token")
    )

    with flask_app.test_client() as client:
        response = client.post(
            "/login", json={"email": " Alice@Example.com ", "password": "secret123"}
        )

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    assert payload["data"]["token"] == "jwt-token"
    assert payload["data"]["user"]["email"] == "alice@example.com"
    assert "password_hash" not in payload["data"]["user"]
    assert "rememberToken" not in payload["data"]
    use_cases["login_use_case"].execute.assert_called_once_with(
        "alice@example.com", "secret123", False
    )


def test_login_with_remember_returns_remember_token(flask_app: Flask, use_cases) -> None:
    use_cases["login_use_case"].execute.return_value = Ok(
        LoginOutcome(user=ALICE, token="jwt-token", remember_token="keep-me")
    )

    with flask_app.test_client() as client:
        response = client.post(
            "/login",
            json={"email": "alice@example.com", "password": "secret123", "remember": True},
        )

    assert response.get_json()["data"]["rememberToken"] == "keep-me"


def test_login_body_with_remember_token_skips_password(flask_app: Flask, use_cases) -> None:
    use_cases["remember_login_use_case"].execute.return_value = Ok(
        LoginOutcome(user=ALICE, token="fresh-token")
    )

    with flask_app.test_client() as client:
        response = client.post("/login", json={"rememberToken": "keep-me"})

    assert response.status_code == 200
    assert response.get_json()["data"]["token"] == "fresh-token"
    use_cases["remember_login_use_case"].execute.assert_called_once_with("keep-me")
    use_cases["login_use_case"].execute.assert_not_called()


def test_empty_remember_token_is_a_validation_error(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.post("/login", json={"rememberToken": ""})

    assert response.status_code == 422
    assert response.get_json()["context"]["fields"] == ["rememberToken"]


def test_login_invalid_credentials_maps_to_401(flask_app: Flask, use_cases) -> None:
    use_cases["login_use_case"].execute.return_value = Err(InvalidCredentialsError())

    with flask_app.test_client() as client:
        response = client.post(
            "/login", json={"email": "alice@example.com", "password": "wrong"}
        )

    assert response.status_code == 401
    assert response.get_json() == {"success": False, "error": "invalid_credentials"}


@pytest.mark.parametrize(
    "body",
    [
        {"email": "not-an-email", "password": "secret123"},
        {"email": "alice@example.com", "password": ""},
        {"password": "secret123"},
    ],
)
def test_login_invalid_payload_returns_422(flask_app: Flask, body: dict) -> None:
    with flask_app.test_client() as client:
        response = client.post("/login", json=body)

    assert response.status_code == 422
    payload = response.get_json()
    assert payload["error"] == "validation_error"
    assert payload["success"] is False


def test_logout_requires_session(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.post("/logout", json={})

    assert response.status_code == 401
    assert response.get_json()["error"] == "authentication_required"


def test_logout_with_garbage_token_is_invalid(flask_app: Flask) -> None:
    with flask_app.test_client() as client:
        response = client.post("/logout", headers={"Authorization": "Bearer nope"})

    assert response.status_code == 401
    assert response.get_json()["error"] == "invalid_token"


def test_logout_passes_verified_caller(flask_app: Flask, issuer, use_cases) -> None:
    use_cases["logout_use_case"].execute.return_value = Ok(None)

    with flask_app.test_client() as client:
        response = client.post(
            "/logout",
            json={"rememberToken": "keep-me"},
            headers={"Authorization": f"Bearer {issuer.issue(ALICE.id)}"},
        )

    assert response.status_code == 200
    assert response.get_json() == {"success": True}
    use_cases["logout_use_case"].execute.assert_called_once_with(
        Caller(user_id=ALICE.id), "keep-me"
    )


@pytest.mark.parametrize("found", [True, False])
def test_forgot_password_answers_the_same_for_any_email(
    flask_app: Flask, use_cases, found: bool
) -> None:
    use_cases["forgot_password_use_case"].execute.return_value = Ok(found)

    with flask_app.test_client() as client:
        response = client.post("/forgot-password", json={"email": "who@example.com"})

    assert response.status_code == 200
    assert response.get_json() == {"success": True}


def test_change_password_expired_code_maps_to_400(flask_app: Flask, use_cases) -> None:
    use_cases["change_password_use_case"].execute.return_value = Err(ResetCodeExpiredError())

    with flask_app.test_client() as client:
        response = client.post(
            "/change-password",
            json={"email": "alice@example.com", "code": "ABC123", "password": "newpass99"},
        )

    assert response.status_code == 400
    assert response.get_json()["error"] == "code_expired"


def test_change_password_unknown_code_maps_to_404(flask_app: Flask, use_cases) -> None:
    use_cases["change_password_use_case"].execute.return_value = Err(UserNotFoundError())

    with flask_app.test_client() as client:
        response = client.post(
            "/change-password",
            json={"email": "alice@example.com", "code": "WRONG1", "password": "newpass99"},
        )

    assert response.status_code == 404
    assert response.get_json()["error"] == "user_not_found"


def test_unexpected_failure_becomes_internal_error(flask_app: Flask, use_cases) -> None:
    use_cases["forgot_password_use_case"].execute.side_effect = RuntimeError("db down")

    with flask_app.test_client() as client:
        response = client.post("/forgot-password", json={"email": "who@example.com"})

    assert response.status_code == 500
    assert response.get_json() == {"success": False, "error": "internal_error"}
