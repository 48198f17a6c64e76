# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .interfaces import ResetCodeNotifier, TokenIssuer
from .pagination import Page, PageRequest
from .results import Err, Ok, Result

__all__ = [
    "Err",
    "Ok",
    "Page",
    "PageRequest",
    "ResetCodeNotifier",
    "Result",
    "TokenIssuer",
]
