# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Translate pydantic failures into the ``validation_error`` envelope.

The context lists the offending field paths and, per error, a stable
``errors.<field>.<type>`` message key the client can localise.
"""

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError
from pydantic_core import ErrorDetails

from .base import ValidationError


def _field_path(details: ErrorDetails) -> str:
    return ".".join(str(part) for part in details["loc"])


def _describe(details: ErrorDetails) -> dict[str, Any]:
    path = _field_path(details)
    kind = details["type"]
    entry: dict[str, Any] = {
        "field": path or "unknown",
        "type": kind,
        "message": f"errors.{path or 'request'}.{kind}",
    }
    if ctx := details.get("ctx"):
        entry["ctx"] = {name: str(value) for name, value in ctx.items()}
    return entry


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    entries = [_describe(details) for details in exc.errors(include_url=False)]
    fields = {entry["field"] for entry in entries if entry["field"] != "unknown"}
    return {"fields": sorted(fields), "errors": entries}


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


__all__ = ["format_pydantic_errors", "raise_validation_error"]
