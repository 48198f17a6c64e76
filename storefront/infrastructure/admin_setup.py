# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import replace

from storefront.application.results import Err
from storefront.application.use_cases.users.create_user import CreateUserUseCase
from storefront.domain.users.repositories import UserRepository
from storefront.infrastructure.audit import AuditAction, audit_log
from storefront.shared.config import AppConfig
from storefront.shared.logging import logger


class AdminSetupError(Exception):
    pass


def setup_admin_user(
    config: AppConfig,
    *,
    users: UserRepository,
    create_user: CreateUserUseCase,
) -> None:
    """Ensure the configured ADMIN_EMAIL account exists and carries ``is_admin``."""
    if not config.admin_email:
        logger.info("admin_setup: No ADMIN_EMAIL configured, skipping admin setup")
        return

    email = config.admin_email.strip().lower()
    user = users.find_by_email(email)

    if user is None:
        if not config.admin_password:
            logger.warning(
                "admin_setup: ADMIN_PASSWORD not set, admin must use forgot-password to sign in"
            )
        created = create_user.execute(
            name=config.admin_name,
            email=email,
            password=config.admin_password,
            is_admin=True,
        )
        if isinstance(created, Err):
            raise AdminSetupError(f"Failed to create admin user: {created.error.code}")
        logger.info(f"admin_setup: Created admin user {created.value.id}")
        audit_log(AuditAction.ADMIN_GRANTED, user_id=created.value.id)
        return

    if user.is_admin:
        logger.info(f"admin_setup: User {user.id} already has admin privileges")
        return

    users.save(replace(user, is_admin=True))
    logger.info(f"admin_setup: Granted admin privileges to user {user.id}")
    audit_log(AuditAction.ADMIN_GRANTED, user_id=user.id)


__all__ = ["AdminSetupError", "setup_admin_user"]
