# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, request
from pydantic import ValidationError

from storefront.application.results import Err
from storefront.application.use_cases.users.create_user import CreateUserUseCase
from storefront.application.use_cases.users.get_user import GetUserUseCase
from storefront.application.use_cases.users.list_users import ListUsersUseCase
from storefront.application.use_cases.users.update_user import UpdateUserUseCase
from storefront.domain.users.entities import Caller, User
from storefront.infrastructure.audit import AuditAction, audit_log
from storefront.infrastructure.auth_middleware import RequestAuthenticator
from storefront.interfaces.http.dto.common import PaginationQueryDTO
from storefront.interfaces.http.dto.users import (
    CreateUserRequestDTO,
    UpdateUserRequestDTO,
    UserDTO,
)
from storefront.interfaces.http.envelope import respond, respond_page
from storefront.shared.config import PaginationConfig
from storefront.shared.errors.validation import raise_validation_error
from storefront.shared.logging import logger


def _render_user(user: User) -> dict:
    return UserDTO.from_entity(user).model_dump(mode="json")


class UsersController:
    def __init__(
        self,
        *,
        authenticator: RequestAuthenticator,
        pagination: PaginationConfig,
        list_users: ListUsersUseCase,
        get_user: GetUserUseCase,
        create_user: CreateUserUseCase,
        update_user: UpdateUserUseCase,
    ) -> None:
        self._authenticator = authenticator
        self._pagination = pagination
        self._list_users = list_users
        self._get_user = get_user
        self._create_user = create_user
        self._update_user = update_user

    def me(self, caller: Caller) -> tuple[Response, HTTPStatus]:
        return respond(self._get_user.execute(caller.user_id), _render_user)

    def list_users(self, caller: Caller) -> tuple[Response, HTTPStatus]:
        try:
            query = PaginationQueryDTO.model_validate(
                request.args.to_dict(),
                context={"max_limit": self._pagination.max_limit},
            )
        except ValidationError as exc:
            raise_validation_error(exc)

        page_request = query.to_page_request(self._pagination.default_limit)
        return respond_page(self._list_users.execute(page_request), _render_user)

    def get_user(self, caller: Caller, user_id: int) -> tuple[Response, HTTPStatus]:
        return respond(self._get_user.execute(user_id), _render_user)

    def create_user(self, caller: Caller) -> tuple[Response, HTTPStatus]:
        try:
            dto = CreateUserRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._create_user.execute(dto.name, dto.email, dto.password, dto.is_admin)
        if not isinstance(result, Err):
            audit_log(
                AuditAction.USER_CREATED,
                user_id=caller.user_id,
                details={"created_user_id": result.value.id, "is_admin": dto.is_admin},
            )
            logger.info(f"users.create: ok user_id={result.value.id} by={caller.user_id}")
        return respond(result, _render_user, status=HTTPStatus.CREATED)

    def update_user(self, caller: Caller, user_id: int) -> tuple[Response, HTTPStatus]:
        try:
            dto = UpdateUserRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._update_user.execute(caller, user_id, name=dto.name, email=dto.email)
        if not isinstance(result, Err):
            audit_log(
                AuditAction.USER_UPDATED,
                user_id=caller.user_id,
                details={"updated_user_id": user_id},
            )
        return respond(result, _render_user)

    def as_blueprint(self) -> Blueprint:
        protect = self._authenticator.protect
        bp = Blueprint("users", __name__)
        bp.add_url_rule("/user", view_func=protect(self.me), methods=["GET"])
        bp.add_url_rule("/users", view_func=protect(self.list_users), methods=["GET"])
        bp.add_url_rule(
            "/user",
            view_func=self._authenticator.protect_admin(self.create_user),
            methods=["POST"],
        )
        bp.add_url_rule("/user/<int:user_id>", view_func=protect(self.get_user), methods=["GET"])
        bp.add_url_rule(
            "/user/<int:user_id>", view_func=protect(self.update_user), methods=["PATCH"]
        )
        return bp
