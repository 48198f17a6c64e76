# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from storefront.infrastructure.db import ENGINE
from storefront.shared.logging import logger


def check_database() -> bool:
    try:
        with ENGINE.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning(f"health: database ping failed: {exc.__class__.__name__}")
        return False
    return True


__all__ = ["check_database"]
