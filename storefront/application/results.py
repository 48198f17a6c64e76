# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Explicit success/failure values returned by use cases.

Use cases never raise for expected outcomes (unknown user, bad code, stale
token). They return ``Ok`` or ``Err`` and the HTTP boundary maps the error
once, through the same handler the Flask error hooks use.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from storefront.shared.errors.base import AppError

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class Err:
    error: AppError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


__all__ = ["Err", "Ok", "Result"]
