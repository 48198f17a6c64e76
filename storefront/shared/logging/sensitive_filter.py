# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_MASK = "***REDACTED***"

# Order matters: the JWT rule must run before the generic token rule.
_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\beyJ[\w-]+\.[\w-]+\.[\w-]+"), "***JWT***"),
    (re.compile(r"(bearer\s+)[\w.-]{20,}", re.IGNORECASE), rf"\1{_MASK}"),
    (re.compile(r"(authorization\s*:\s*['\"]?)[^'\"]{10,}", re.IGNORECASE), rf"\1{_MASK}"),
    (
        re.compile(r"((?:remember[_-]?token|rememberToken)['\"]?\s*[:=]\s*['\"]?)[\w.-]{8,}", re.IGNORECASE),
        rf"\1{_MASK}",
    ),
    (re.compile(r"(\btoken['\"]?\s*[:=]\s*['\"]?)[\w.-]{20,}", re.IGNORECASE), rf"\1{_MASK}"),
    (re.compile(r"((?:forgot_)?code['\"]?\s*[:=]\s*['\"]?)[A-Za-z0-9]{4,32}\b", re.IGNORECASE), rf"\1{_MASK}"),
    (
        re.compile(r"((?:new_|old_)?password(?:_hash)?['\"]?\s*[:=]\s*['\"]?)[^'\"\s,}]+", re.IGNORECASE),
        rf"\1{_MASK}",
    ),
    (re.compile(r"(secret[_-]?key['\"]?\s*[:=]\s*['\"]?)[\w-]{8,}", re.IGNORECASE), rf"\1{_MASK}"),
    (re.compile(r"(\w+(?:\+\w+)?://[^:/@\s]+:)[^@\s]+@"), rf"\1{_MASK}@"),
    (re.compile(r"[\w.%+-]+@([\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,})"), r"***@\1"),
)


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru filter; masks credentials in the message and in string extras."""
    record["message"] = sanitize_message(record["message"])
    extra = record["extra"]
    for key, value in extra.items():
        if isinstance(value, str):
            extra[key] = sanitize_message(value)
    return True
