# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""JSON envelope shared by every endpoint: ``{success, data?, error?, context?, pagination?}``."""

from __future__ import annotations

from collections.abc import Callable
from http import HTTPStatus
from typing import Any, TypeVar

from flask import Response, jsonify

from storefront.application.pagination import Page
from storefront.application.results import Err, Result
from storefront.shared.errors.http import handle_app_error

T = TypeVar("T")


def success(
    data: Any = None,
    *,
    status: HTTPStatus = HTTPStatus.OK,
    pagination: dict[str, int] | None = None,
) -> tuple[Response, HTTPStatus]:
    payload: dict[str, Any] = {"success": True}
    if data is not None:
        payload["data"] = data
    if pagination is not None:
        payload["pagination"] = pagination
    return jsonify(payload), status


def respond(
    result: Result[T],
    render: Callable[[T], Any] | None = None,
    *,
    status: HTTPStatus = HTTPStatus.OK,
) -> tuple[Response, HTTPStatus]:
    if isinstance(result, Err):
        return handle_app_error(result.error)
    return success(render(result.value) if render else None, status=status)


def respond_page(
    result: Result[Page[T]],
    render: Callable[[T], Any],
) -> tuple[Response, HTTPStatus]:
    if isinstance(result, Err):
        return handle_app_error(result.error)
    page = result.value
    return success([render(item) for item in page.items], pagination=page.pagination())


__all__ = ["respond", "respond_page", "success"]
