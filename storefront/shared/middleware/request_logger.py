# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time
from collections.abc import Mapping

from flask import Flask, Response, g, request

from storefront.shared.config import load_config
from storefront.shared.logging import clear_correlation_id, logger, set_correlation_id

from .client import client_ip

REQUEST_ID_HEADER = "X-Request-ID"

_SECRET_HEADERS = frozenset({"authorization", "cookie", "x-api-key", "x-auth-token"})
_SECRET_ARG_HINTS = ("password", "token", "code", "secret", "auth")


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _masked_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        name: _fingerprint(value) if name.lower() in _SECRET_HEADERS else value
        for name, value in headers.items()
    }


def _masked_args(args: Mapping[str, str]) -> dict[str, str]:
    return {
        name: "<redacted>" if any(hint in name.lower() for hint in _SECRET_ARG_HINTS) else value
        for name, value in args.items()
    }


def _incoming_request_id() -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "").strip()
    # Client-supplied ids are capped so they cannot flood the log lines.
    return supplied[:64] if supplied else secrets.token_urlsafe(8)


def configure_request_logging(app: Flask) -> None:
    """Tag every request with a correlation id and log one line in, one line out."""
    verbose = load_config().debug_logging

    @app.before_request
    def _start() -> None:
        g.correlation_id = _incoming_request_id()
        g.started_at = time.perf_counter()
        set_correlation_id(g.correlation_id)

        line = f"--> {request.method} {request.path} ip={client_ip()}"
        if verbose:
            line += (
                f" args={_masked_args(request.args)}"
                f" headers={_masked_headers(request.headers)}"
                f" body_bytes={request.content_length or 0}"
            )
        logger.info(line)

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("started_at", time.perf_counter())) * 1000
        line = f"<-- {request.method} {request.path} {response.status_code} {elapsed_ms:.1f}ms"
        if verbose:
            line += f" user={g.get('user_id')}"
        logger.info(line)
        response.headers.setdefault(REQUEST_ID_HEADER, g.get("correlation_id", "-"))
        return response

    @app.teardown_request
    def _reset(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"request aborted by {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
