# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-client sliding-window throttling for the public auth endpoints."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from functools import wraps
from threading import Lock
from typing import Any

from flask import request

from storefront.shared.config import load_config
from storefront.shared.errors.base import RateLimitedError
from storefront.shared.logging import logger

from .client import client_ip


class InMemoryRateLimiter:
    def __init__(
        self,
        limit: int,
        window_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._limit = max(1, int(limit))
        self._window = max(0.1, float(window_seconds))
        self._clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._lock = Lock()

    def acquire(self, key: str) -> float:
        """Record a hit for ``key``.

        Returns 0 when the hit is admitted, otherwise the seconds left until
        the oldest hit in the window expires.
        """
        now = self._clock()
        with self._lock:
            hits = self._hits.setdefault(key, deque())
            while hits and now - hits[0] >= self._window:
                hits.popleft()
            if len(hits) >= self._limit:
                return self._window - (now - hits[0])
            hits.append(now)
            return 0.0


def rate_limit(limit: int | None = None, window_seconds: float | None = None):
    security = load_config().security

    def decorator(view: Callable[..., Any]) -> Callable[..., Any]:
        if not security.enable_rate_limit:
            return view

        limiter = InMemoryRateLimiter(
            limit or security.rate_limit_requests,
            window_seconds or security.rate_limit_window,
        )

        @wraps(view)
        def throttled(*args: Any, **kwargs: Any):
            wait = limiter.acquire(f"{request.endpoint}|{client_ip()}")
            if wait > 0:
                logger.warning(f"rate_limit: {request.method} {request.path} throttled for {wait:.1f}s")
                raise RateLimitedError(wait)
            return view(*args, **kwargs)

        return throttled

    return decorator


__all__ = ["InMemoryRateLimiter", "rate_limit"]
