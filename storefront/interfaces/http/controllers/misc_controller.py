# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from http import HTTPStatus

from flask import Blueprint

from storefront.interfaces.http.envelope import success


class MiscController:
    def __init__(self, *, app_name: str, app_version: str, check_database: Callable[[], bool]):
        self._app_name = app_name
        self._app_version = app_version
        self._check_database = check_database

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("misc", __name__)
        bp.add_url_rule("/", view_func=self.index, methods=["GET"])
        bp.add_url_rule("/health", view_func=self.health, methods=["GET"])
        return bp

    def index(self):
        return success({"name": self._app_name, "version": self._app_version})

    def health(self):
        database_ok = self._check_database()
        status = HTTPStatus.OK if database_ok else HTTPStatus.SERVICE_UNAVAILABLE
        return success(
            {"ok": database_ok, "database": "ok" if database_ok else "unavailable"},
            status=status,
        )
