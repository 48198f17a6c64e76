# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, Response, request
from pydantic import ValidationError

from storefront.application.use_cases.catalog.products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    GetProductUseCase,
    ListProductsUseCase,
    UpdateProductUseCase,
)
from storefront.domain.catalog.entities import Product
from storefront.domain.users.entities import Caller
from storefront.infrastructure.auth_middleware import RequestAuthenticator
from storefront.interfaces.http.dto.catalog import (
    CreateProductRequestDTO,
    ProductDTO,
    UpdateProductRequestDTO,
)
from storefront.interfaces.http.dto.common import PaginationQueryDTO
from storefront.interfaces.http.envelope import respond, respond_page
from storefront.shared.config import PaginationConfig
from storefront.shared.errors.validation import raise_validation_error


def _render_product(product: Product) -> dict:
    return ProductDTO.from_entity(product).model_dump(mode="json")


class ProductsController:
    def __init__(
        self,
        *,
        authenticator: RequestAuthenticator,
        pagination: PaginationConfig,
        list_products: ListProductsUseCase,
        get_product: GetProductUseCase,
        create_product: CreateProductUseCase,
        update_product: UpdateProductUseCase,
        delete_product: DeleteProductUseCase,
    ) -> None:
        self._authenticator = authenticator
        self._pagination = pagination
        self._list_products = list_products
        self._get_product = get_product
        self._create_product = create_product
        self._update_product = update_product
        self._delete_product = delete_product

    def list_products(self, caller: Caller) -> tuple[Response, HTTPStatus]:
        try:
            query = PaginationQueryDTO.model_validate(
                request.args.to_dict(),
                context={"max_limit": self._pagination.max_limit},
            )
        except ValidationError as exc:
            raise_validation_error(exc)

        page_request = query.to_page_request(self._pagination.default_limit)
        return respond_page(self._list_products.execute(page_request), _render_product)

    def get_product(self, caller: Caller, product_id: int) -> tuple[Response, HTTPStatus]:
        return respond(self._get_product.execute(product_id), _render_product)

    def create_product(self, caller: Caller) -> tuple[Response, HTTPStatus]:
        try:
            dto = CreateProductRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._create_product.execute(dto.to_draft())
        return respond(result, _render_product, status=HTTPStatus.CREATED)

    def update_product(self, caller: Caller, product_id: int) -> tuple[Response, HTTPStatus]:
        try:
            dto = UpdateProductRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        return respond(self._update_product.execute(product_id, dto.changes()), _render_product)

    def delete_product(self, caller: Caller, product_id: int) -> tuple[Response, HTTPStatus]:
        return respond(self._delete_product.execute(product_id))

    def as_blueprint(self) -> Blueprint:
        protect = self._authenticator.protect
        bp = Blueprint("products", __name__)
        bp.add_url_rule("/products", view_func=protect(self.list_products), methods=["GET"])
        bp.add_url_rule("/product", view_func=protect(self.create_product), methods=["POST"])
        bp.add_url_rule(
            "/product/<int:product_id>",
            view_func=protect(self.get_product),
            methods=["GET"],
        )
        bp.add_url_rule(
            "/product/<int:product_id>",
            view_func=protect(self.update_product),
            methods=["PATCH"],
        )
        bp.add_url_rule(
            "/product/<int:product_id>",
            view_func=protect(self.delete_product),
            methods=["DELETE"],
        )
        return bp
