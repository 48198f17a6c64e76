# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
import string

RESET_CODE_ALPHABET = string.ascii_letters + string.digits


def generate_reset_code(length: int = 6) -> str:
    return "".join(secrets.choice(RESET_CODE_ALPHABET) for _ in range(length))


def generate_unusable_password() -> str:
    """Placeholder secret for accounts created without a password."""
    return secrets.token_urlsafe(32)
