# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from flask import Flask, Response
from flask_cors import CORS

from storefront.infrastructure.admin_setup import setup_admin_user
from storefront.infrastructure.container import container
from storefront.infrastructure.db import init_db
from storefront.shared.config import AppConfig, load_config
from storefront.shared.logging import logger, setup_logging
from storefront.shared.middleware.error_handler import configure_error_handling
from storefront.shared.middleware.request_logger import REQUEST_ID_HEADER, configure_request_logging

_config = load_config()

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
}
_HSTS = "max-age=31536000; includeSubDomains; preload"


def _install_security_headers(app: Flask, config: AppConfig) -> None:
    headers = dict(_SECURITY_HEADERS)
    if config.security.enable_hsts:
        headers["Strict-Transport-Security"] = _HSTS

    @app.after_request
    def _apply(response: Response) -> Response:
        for name, value in headers.items():
            response.headers.setdefault(name, value)
        return response


def create_app() -> Flask:
    setup_logging(_config.log_level, debug_mode=_config.debug_logging, log_file=_config.log_file)
    init_db()
    setup_admin_user(
        _config,
        users=container.user_repository,
        create_user=container.create_user_use_case,
    )

    app = Flask(__name__)
    app.config.update(SECRET_KEY=_config.secret_key)
    configure_error_handling(app)
    configure_request_logging(app)
    _install_security_headers(app, _config)
    CORS(
        app,
        origins=_config.security.allowed_origins,
        allow_headers=["Authorization", "Content-Type", REQUEST_ID_HEADER],
        expose_headers=[REQUEST_ID_HEADER],
    )

    for controller in (
        container.misc_controller,
        container.auth_controller,
        container.users_controller,
        container.categories_controller,
        container.products_controller,
    ):
        app.register_blueprint(controller.as_blueprint())

    logger.info(f"app: {_config.app_name} {_config.app_version} ready ({_config.app_env})")
    return app


app = create_app()


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000, debug=not _config.is_production())
