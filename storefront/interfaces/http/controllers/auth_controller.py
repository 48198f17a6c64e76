# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, request
from pydantic import ValidationError

from storefront.application.results import Err
from storefront.application.use_cases.users.change_password import ChangePasswordUseCase
from storefront.application.use_cases.users.forgot_password import ForgotPasswordUseCase
from storefront.application.use_cases.users.login_user import LoginOutcome, LoginUserUseCase
from storefront.application.use_cases.users.login_with_remember_token import (
    LoginWithRememberTokenUseCase,
)
from storefront.application.use_cases.users.logout_user import LogoutUserUseCase
from storefront.domain.users.entities import Caller
from storefront.infrastructure.audit import AuditAction, audit_log
from storefront.infrastructure.auth_middleware import RequestAuthenticator
from storefront.interfaces.http.dto.auth import (
    ChangePasswordRequestDTO,
    ForgotPasswordRequestDTO,
    LoginRequestDTO,
    LoginResponseDTO,
    LogoutRequestDTO,
    RememberLoginRequestDTO,
)
from storefront.interfaces.http.dto.users import UserDTO
from storefront.interfaces.http.envelope import respond, success
from storefront.shared.errors.validation import raise_validation_error
from storefront.shared.logging import logger
from storefront.shared.middleware.client import client_ip
from storefront.shared.middleware.rate_limit import rate_limit


def _render_login(outcome: LoginOutcome) -> dict:
    dto = LoginResponseDTO(
        user=UserDTO.from_entity(outcome.user),
        token=outcome.token,
        remember_token=outcome.remember_token,
    )
    return dto.model_dump(mode="json", by_alias=True, exclude_none=True)


class AuthController:
    def __init__(
        self,
        *,
        authenticator: RequestAuthenticator,
        login_use_case: LoginUserUseCase,
        remember_login_use_case: LoginWithRememberTokenUseCase,
        logout_use_case: LogoutUserUseCase,
        forgot_password_use_case: ForgotPasswordUseCase,
        change_password_use_case: ChangePasswordUseCase,
    ) -> None:
        self._authenticator = authenticator
        self._login_use_case = login_use_case
        self._remember_login_use_case = remember_login_use_case
        self._logout_use_case = logout_use_case
        self._forgot_password_use_case = forgot_password_use_case
        self._change_password_use_case = change_password_use_case

    @rate_limit(limit=10, window_seconds=60.0)
    def login(self) -> tuple[Response, HTTPStatus]:
        body = request.get_json(silent=True) or {}
        if isinstance(body, dict) and "rememberToken" in body:
            return self._login_with_remember_token(body)

        try:
            dto = LoginRequestDTO.model_validate(body)
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_ip()
        result = self._login_use_case.execute(dto.email, dto.password, dto.remember)

        if isinstance(result, Err):
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"email": dto.email, "error": result.error.code},
                success=False,
            )
            logger.info(f"auth.login: rejected ({result.error.code})")
        else:
            audit_log(
                AuditAction.LOGIN_SUCCESS,
                user_id=result.value.user.id,
                ip_address=ip_address,
                details={"remember": dto.remember},
            )
            logger.info(f"auth.login: ok user_id={result.value.user.id} remember={dto.remember}")

        return respond(result, _render_login)

    def _login_with_remember_token(self, body: dict) -> tuple[Response, HTTPStatus]:
        try:
            dto = RememberLoginRequestDTO.model_validate(body)
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_ip()
        result = self._remember_login_use_case.execute(dto.remember_token)

        if isinstance(result, Err):
            audit_log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"method": "remember_token", "error": result.error.code},
                success=False,
            )
        else:
            audit_log(
                AuditAction.LOGIN_REMEMBERED,
                user_id=result.value.user.id,
                ip_address=ip_address,
            )
            logger.info(f"auth.login: ok via remember token user_id={result.value.user.id}")

        return respond(result, _render_login)

    def logout(self, caller: Caller) -> tuple[Response, HTTPStatus]:
        try:
            dto = LogoutRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._logout_use_case.execute(caller, dto.remember_token)
        audit_log(
            AuditAction.LOGOUT,
            user_id=caller.user_id,
            ip_address=client_ip(),
            details={"revoked": bool(dto.remember_token)},
        )
        logger.info(f"auth.logout: ok user_id={caller.user_id}")
        return respond(result)

    @rate_limit(limit=5, window_seconds=60.0)
    def forgot_password(self) -> tuple[Response, HTTPStatus]:
        try:
            dto = ForgotPasswordRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._forgot_password_use_case.execute(dto.email)
        if isinstance(result, Err):
            return respond(result)

        if result.value:
            audit_log(AuditAction.PASSWORD_RESET_REQUESTED, ip_address=client_ip())
            logger.info("auth.forgot_password: code issued")
        else:
            logger.info("auth.forgot_password: no matching account")
        # Same answer whether or not the account exists.
        return success()

    @rate_limit(limit=5, window_seconds=60.0)
    def change_password(self) -> tuple[Response, HTTPStatus]:
        try:
            dto = ChangePasswordRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = client_ip()
        result = self._change_password_use_case.execute(dto.email, dto.code, dto.password)

        if isinstance(result, Err):
            audit_log(
                AuditAction.PASSWORD_CHANGE_FAILED,
                ip_address=ip_address,
                details={"error": result.error.code},
                success=False,
            )
            return respond(result)

        audit_log(AuditAction.PASSWORD_CHANGED, user_id=result.value.id, ip_address=ip_address)
        logger.info(f"auth.change_password: ok user_id={result.value.id}")
        return success()

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__)
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule(
            "/logout",
            view_func=self._authenticator.protect(self.logout),
            methods=["POST"],
        )
        bp.add_url_rule("/forgot-password", view_func=self.forgot_password, methods=["POST"])
        bp.add_url_rule("/change-password", view_func=self.change_password, methods=["POST"])
        return bp
