# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, request
from pydantic import ValidationError

from storefront.application.use_cases.catalog.categories import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
    UpdateCategoryUseCase,
)
from storefront.domain.catalog.entities import Category
from storefront.domain.users.entities import Caller
from storefront.infrastructure.auth_middleware import RequestAuthenticator
from storefront.interfaces.http.dto.catalog import (
    CategoryDTO,
    CreateCategoryRequestDTO,
    UpdateCategoryRequestDTO,
)
from storefront.interfaces.http.dto.common import PaginationQueryDTO
from storefront.interfaces.http.envelope import respond, respond_page
from storefront.shared.config import PaginationConfig
from storefront.shared.errors.validation import raise_validation_error


def _render_category(category: Category) -> dict:
    return CategoryDTO.from_entity(category).model_dump(mode="json")


class CategoriesController:
    def __init__(
        self,
        *,
        authenticator: RequestAuthenticator,
        pagination: PaginationConfig,
        list_categories: ListCategoriesUseCase,
        get_category: GetCategoryUseCase,
        create_category: CreateCategoryUseCase,
        update_category: UpdateCategoryUseCase,
        delete_category: DeleteCategoryUseCase,
    ) -> None:
        self._authenticator = authenticator
        self._pagination = pagination
        self._list_categories = list_categories
        self._get_category = get_category
        self._create_category = create_category
        self._update_category = update_category
        self._delete_category = delete_category

    def list_categories(self, caller: Caller) -> tuple[Response, HTTPStatus]:
        try:
            query = PaginationQueryDTO.model_validate(
                request.args.to_dict(),
                context={"max_limit": self._pagination.max_limit},
            )
        except ValidationError as exc:
            raise_validation_error(exc)

        page_request = query.to_page_request(self._pagination.default_limit)
        return respond_page(self._list_categories.execute(page_request), _render_category)

    def get_category(self, caller: Caller, category_id: int) -> tuple[Response, HTTPStatus]:
        return respond(self._get_category.execute(category_id), _render_category)

    def create_category(self, caller: Caller) -> tuple[Response, HTTPStatus]:
        try:
            dto = CreateCategoryRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._create_category.execute(dto.name, dto.description)
        return respond(result, _render_category, status=HTTPStatus.CREATED)

    def update_category(self, caller: Caller, category_id: int) -> tuple[Response, HTTPStatus]:
        try:
            dto = UpdateCategoryRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._update_category.execute(
            category_id, name=dto.name, description=dto.description
        )
        return respond(result, _render_category)

    def delete_category(self, caller: Caller, category_id: int) -> tuple[Response, HTTPStatus]:
        return respond(self._delete_category.execute(category_id))

    def as_blueprint(self) -> Blueprint:
        protect = self._authenticator.protect
        bp = Blueprint("categories", __name__)
        bp.add_url_rule("/categories", view_func=protect(self.list_categories), methods=["GET"])
        bp.add_url_rule("/category", view_func=protect(self.create_category), methods=["POST"])
        bp.add_url_rule(
            "/category/<int:category_id>",
            view_func=protect(self.get_category),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/category/<int:category_id>",
            view_func=protect(self.update_category),
            methods=["PATCH"],
        )
        bp.add_url_rule(
            "/category/<int:category_id>",
            view_func=protect(self.delete_category),
            methods=["DELETE"],
        )
        return bp
