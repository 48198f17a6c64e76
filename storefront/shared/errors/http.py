# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from storefront.shared.config import load_config
from storefront.shared.logging import logger
from storefront.shared.middleware.client import client_ip

from .base import AppError, FrameworkError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def _http_error_code(exc: HTTPException) -> str:
    return "_".join((exc.name or "http error").lower().split())


def register_error_handler(app: Flask) -> None:
    """Every failure leaves the API as a ``{"success": false, "error": ...}`` body."""
    verbose = load_config().debug_logging

    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError):
        logger.warning(f"http: {exc.code} ({int(exc.status)}) on {request.method} {request.path}")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _on_http_exception(exc: HTTPException):
        status = exc.code or HTTPStatus.INTERNAL_SERVER_ERROR
        return jsonify({"success": False, "error": _http_error_code(exc)}), status

    @app.errorhandler(Exception)
    def _on_unexpected(exc: Exception):
        where = f"{request.method} {request.path}"
        if verbose:
            logger.exception(
                f"http: unhandled {type(exc).__name__} on {where} "
                f"ip={client_ip()} user={getattr(g, 'user_id', None)} "
                f"args={dict(request.args)} body_bytes={request.content_length or 0}"
            )
        else:
            logger.error(f"http: unhandled {type(exc).__name__} on {where}")
        return handle_app_error(FrameworkError())
