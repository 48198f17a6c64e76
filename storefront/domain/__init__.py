# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .catalog.entities import Category, Product, compute_sale_price
from .exceptions import InvariantViolation, InvariantViolationError
from .users.entities import Caller, RememberToken, SessionClaims, User

__all__ = [
    "Caller",
    "Category",
    "InvariantViolation",
    "InvariantViolationError",
    "Product",
    "RememberToken",
    "SessionClaims",
    "User",
    "compute_sale_price",
]
